"""Repository resource reconciliation.

Classifies declared repositories into local, remote or virtual variants,
validates them, and drives RepoFlow through create/read/update/delete/import
while keeping a stable ``workspaceId/repositoryId`` identity.

Usage
-----
Create a local npm repository::

    from reeve.repoflow import RepoFlowClient, RepoFlowConfig
    from reeve.repository import RepositoryDesired, RepositoryReconciler

    with RepoFlowClient(RepoFlowConfig.from_env()) as client:
        reconciler = RepositoryReconciler(client)
        state = reconciler.create(
            RepositoryDesired(
                name="local-example",
                workspace="example",
                repository_type="local",
                package_type="npm",
            )
        )
        print(state.composite_id)

"""

from reeve.repository.classification import classify, narrow, validate
from reeve.repository.errors import (
    InvalidReferenceError,
    MissingRequiredFieldError,
    RemoteOperationFailedError,
    RepositoryNotFoundError,
    UnknownVariantError,
    UnsupportedPackageTypeError,
    VariantMismatchError,
)
from reeve.repository.mapping import from_remote, to_create_request
from reeve.repository.models import (
    LocalRepositorySpec,
    PackageType,
    RemoteRepositorySpec,
    RepositoryDesired,
    RepositorySpec,
    RepositoryState,
    RepositoryType,
    VirtualRepositorySpec,
)
from reeve.repository.reconciler import RepositoryReconciler

__all__ = [
    "InvalidReferenceError",
    "LocalRepositorySpec",
    "MissingRequiredFieldError",
    "PackageType",
    "RemoteOperationFailedError",
    "RemoteRepositorySpec",
    "RepositoryDesired",
    "RepositoryNotFoundError",
    "RepositoryReconciler",
    "RepositorySpec",
    "RepositoryState",
    "RepositoryType",
    "UnknownVariantError",
    "UnsupportedPackageTypeError",
    "VariantMismatchError",
    "VirtualRepositorySpec",
    "classify",
    "from_remote",
    "narrow",
    "to_create_request",
    "validate",
]

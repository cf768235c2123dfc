"""Storage error mapping — SQLAlchemy failures become StorageError."""

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from storefront.core.errors import StorageError
from storefront.infrastructure.database import map_storage_error


def test_integrity_error_maps_to_commit_failure():
    err = map_storage_error(IntegrityError("INSERT", {}, Exception("unique")))
    assert isinstance(err, StorageError)
    assert err.operation == "commit"


def test_operational_error_maps_to_execute_failure():
    err = map_storage_error(OperationalError("SELECT", {}, Exception("gone")))
    assert err.operation == "execute"
    assert err.http_status == 503


def test_generic_error_maps_to_unknown():
    assert map_storage_error(SQLAlchemyError("boom")).operation == "unknown"

"""
Tenant scope resolution.

Turns the authenticated principal into the tenant id that every store and
use case receives explicitly. There is no default tenant: anything that
cannot be resolved is refused before storage is touched.
"""

from src.config import get_logger
from src.core.entities.tenant import Principal
from src.core.exceptions import AuthorizationError

logger = get_logger(__name__)


def require_tenant(tenant_id: int | None) -> int:
    """Check a tenant id passed down the call chain.

    Raises:
        AuthorizationError: missing or non-positive id
    """
    if tenant_id is None or isinstance(tenant_id, bool) or not isinstance(tenant_id, int):
        raise AuthorizationError("tenant scope missing")
    if tenant_id <= 0:
        raise AuthorizationError(f"invalid tenant id {tenant_id}")
    return tenant_id


class TenantScopeGuard:
    """Resolves the tenant of a principal, failing closed."""

    def resolve(self, principal: Principal | None) -> int:
        if principal is None:
            logger.warning("tenant_resolution_failed", reason="unauthenticated")
            raise AuthorizationError("No authenticated principal")

        if principal.tenant_id is None:
            logger.warning(
                "tenant_resolution_failed",
                principal_id=principal.id,
                reason="no_tenant",
            )
            raise AuthorizationError(f"principal {principal.id} has no tenant")

        return require_tenant(principal.tenant_id)

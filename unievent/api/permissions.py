# unievent/api/permissions.py
from fastapi import Depends

from unievent.api.deps import AdminPrincipal, Principal, StudentPrincipal, get_current_principal
from unievent.core.errors import Forbidden


def require_student(principal: Principal = Depends(get_current_principal)) -> StudentPrincipal:
    """Use: Depends(require_student). Only students pass."""
    if not isinstance(principal, StudentPrincipal):
        raise Forbidden("Only students can perform this action")
    return principal


def require_admin(principal: Principal = Depends(get_current_principal)) -> AdminPrincipal:
    """
    Use: Depends(require_admin)
    admin e super_admin passam; super_admin continua preso à própria college.
    """
    if not isinstance(principal, AdminPrincipal):
        raise Forbidden("Insufficient permissions")
    return principal

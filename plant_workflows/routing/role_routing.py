"""Landing-page resolution from user roles.

A signed-in user hitting the site root is sent to the page of their
highest-priority role. Token decoding happens upstream; this module only
sees the role names.
"""

from __future__ import annotations

from typing import Iterable

DEFAULT_REDIRECT: str = "/dashboard"

ROLE_REDIRECTS: dict[str, str] = {
    "admin": "/dashboard",
    "dashboard": "/dashboard",
    "orders": "/dashboard/orders",
    "store_finished_goods": "/dashboard/inventory/finished-goods",
    "store_raw_materials": "/dashboard/inventory/materials",
    "store_general": "/dashboard/inventory/general",
    "machinery": "/dashboard/inventory/machinery",
    "purchase_request": "/dashboard/purchases",
    "vendors": "/dashboard/vendors",
    "production_plans": "/dashboard/planning",
    "production_batch_mgt": "/dashboard/production",
    "documents": "/dashboard/documents",
    "reports": "/dashboard/report",
    "personnel_team": "/dashboard/personnel/team",
    "personnel_training": "/dashboard/personnel/training-plan",
}

# First match wins.
ROLE_PRIORITY: tuple[str, ...] = tuple(ROLE_REDIRECTS)


def redirect_path_for_roles(
    roles: str | Iterable[str] | None,
    *,
    redirects: dict[str, str] | None = None,
    priority: Iterable[str] | None = None,
) -> str:
    """Return the landing path for ``roles``.

    ``roles`` may be a single role name or any iterable of names. Unknown
    roles are ignored; no match falls back to ``/dashboard``.
    """
    if not roles:
        return DEFAULT_REDIRECT

    held = {roles} if isinstance(roles, str) else set(roles)
    table = ROLE_REDIRECTS if redirects is None else redirects
    order = ROLE_PRIORITY if priority is None else tuple(priority)

    for role in order:
        if role in held and role in table:
            return table[role]

    return DEFAULT_REDIRECT

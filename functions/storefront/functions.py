"""
Serverless functions run with elevated credentials: admin user listing with
order aggregates, and provisioning of the seed accounts.

Handlers return a `FunctionResponse` so they can be mounted on any HTTP
surface; `storefront.routes` exposes them under `/functions/v1/`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from shared.types import ProviderUser, Role, SellerProfile, UserProfile
from storefront.auth import AuthError, AuthProvider, role_from_metadata
from storefront.db import DbClient
from storefront.seed import SEED_USERS

logger = logging.getLogger(__name__)


@dataclass
class FunctionResponse:
    status_code: int
    body: dict


def _summary(
    profile: UserProfile, auth_user: Optional[ProviderUser], order_count: int
) -> dict:
    return {
        "id": profile.id,
        "email": profile.email,
        "name": profile.name,
        "role": role_from_metadata(
            auth_user.user_metadata if auth_user else None
        ).value,
        "created_at": profile.created_at,
        "last_sign_in_at": (
            auth_user.last_sign_in_at if auth_user and auth_user.last_sign_in_at
            else profile.created_at
        ),
        "order_count": order_count,
    }


def get_user_details(db: DbClient, auth: AuthProvider, user_id: str) -> Optional[dict]:
    profile = db.get_user_profile(user_id)
    if profile is None:
        return None
    auth_user = auth.admin_get_user_by_id(user_id)
    order_count, total_spent = db.get_order_totals(user_id)
    details = _summary(profile, auth_user, order_count)
    details.update(
        {
            "total_spent": total_spent,
            "address": profile.address,
            "city": profile.city,
            "mobile": profile.mobile,
        }
    )
    return details


def list_user_summaries(db: DbClient, auth: AuthProvider) -> list[dict]:
    profiles = db.list_user_profiles()
    auth_users = {user.id: user for user in auth.admin_list_users()}
    summaries = []
    for profile in profiles:
        order_count, _ = db.get_order_totals(profile.id)
        summaries.append(_summary(profile, auth_users.get(profile.id), order_count))
    return summaries


def get_users(
    db: DbClient, auth: AuthProvider, user_id: str | None = None
) -> FunctionResponse:
    try:
        if user_id:
            details = get_user_details(db, auth, user_id)
            if details is None:
                return FunctionResponse(404, {"error": "User not found"})
            return FunctionResponse(200, {"user": details})
        return FunctionResponse(200, {"users": list_user_summaries(db, auth)})
    except Exception as exc:
        logger.exception("get-users failed")
        return FunctionResponse(500, {"error": str(exc)})


def _provision(db: DbClient, auth: AuthProvider, user_data: dict, existing: set) -> dict:
    email = user_data["email"]
    if email.lower() in existing:
        return {"email": email, "status": "already_exists"}

    role = user_data.get("role", Role.USER.value)
    try:
        created = auth.admin_create_user(
            email,
            user_data["password"],
            email_confirm=True,
            user_metadata={"role": role},
        )
    except AuthError as exc:
        return {"email": email, "status": "error", "error": exc.message}

    db.save_user_profile(
        UserProfile(id=created.id, email=email, name=user_data.get("name", ""))
    )
    if role == Role.SELLER.value:
        db.save_seller_profile(
            SellerProfile(
                id=created.id,
                business_name=user_data.get("business_name", ""),
                business_email=user_data.get("business_email"),
                business_phone=user_data.get("business_phone"),
                is_verified=True,
                is_active=True,
            )
        )
    existing.add(email.lower())
    return {"email": email, "status": "created", "user_id": created.id, "role": role}


def create_users(
    db: DbClient, auth: AuthProvider, seed: Iterable[dict] = SEED_USERS
) -> FunctionResponse:
    try:
        existing = {(u.email or "").lower() for u in auth.admin_list_users()}
        results = [_provision(db, auth, user_data, existing) for user_data in seed]
        logger.info(
            "create-users: %d created",
            sum(1 for r in results if r["status"] == "created"),
        )
        return FunctionResponse(200, {"success": True, "results": results})
    except Exception as exc:
        logger.exception("create-users failed")
        return FunctionResponse(500, {"success": False, "error": str(exc)})

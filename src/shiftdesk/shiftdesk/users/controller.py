from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import api_view, current_user_id, json_body
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container) -> None:
    @app.route("/api/me", methods=["GET"], endpoint="me")
    @api_view
    def me():
        user_id = current_user_id()
        profile = container.user_service.get_profile(user_id)
        team = container.user_service.get_user_team(user_id)
        return jsonify(
            {
                "success": True,
                "user_id": user_id,
                "name": profile.display_name if profile else None,
                "role": container.user_service.get_user_role(user_id).value,
                "team": {"team_id": team.team_id, "name": team.name} if team else None,
            }
        )

    @app.route("/api/admin/registrations/<int:user_id>/approve", methods=["POST"], endpoint="approve_registration")
    @api_view
    def approve_registration(user_id: int):
        current_role = container.user_service.get_user_role(current_user_id())
        role_s = json_body().get("role") or Role.STAFF.value
        try:
            role = Role(role_s)
        except ValueError:
            raise ValidationError("Loại tài khoản không hợp lệ")

        container.user_service.approve_registration(current_role=current_role, user_id=user_id, role=role)
        return jsonify({"success": True, "message": "Đã phê duyệt tài khoản"})

    @app.route("/api/admin/registrations/<int:user_id>/reject", methods=["POST"], endpoint="reject_registration")
    @api_view
    def reject_registration(user_id: int):
        current_role = container.user_service.get_user_role(current_user_id())
        container.user_service.reject_registration(current_role=current_role, user_id=user_id)
        return jsonify({"success": True, "message": "Đã từ chối tài khoản"})

from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_positive_id
from ..common.web import api_view, current_user_id, json_body
from ..core.exceptions import ValidationError


def register(app: Flask, container) -> None:
    def _actor():
        """(user_id, role, team_id) of the signed-in user; the board needs a team."""

        user_id = current_user_id()
        team = container.user_service.get_user_team(user_id)
        if not team:
            raise ValidationError("Bạn chưa thuộc nhóm nào")
        return user_id, container.user_service.get_user_role(user_id), team.team_id

    @app.route("/api/board", methods=["GET"], endpoint="board")
    @api_view
    def board():
        _, _, team_id = _actor()
        columns = container.task_board_service.load_board(
            team_id,
            search=request.args.get("search", ""),
            assignee=request.args.get("assignee", "all"),
        )
        return jsonify({"success": True, "columns": columns})

    @app.route("/api/board/columns", methods=["POST"], endpoint="create_column")
    @api_view
    def create_column():
        _, role, team_id = _actor()
        data = json_body()
        column_id = container.task_board_service.create_column(
            current_role=role, team_id=team_id, name=data.get("name", ""), color=data.get("color")
        )
        return jsonify({"success": True, "column_id": column_id, "message": "Đã tạo cột mới."}), 201

    @app.route("/api/board/columns/<int:column_id>", methods=["PATCH"], endpoint="update_column")
    @api_view
    def update_column(column_id: int):
        _, role, team_id = _actor()
        data = json_body()
        container.task_board_service.update_column(
            current_role=role, team_id=team_id, column_id=column_id, name=data.get("name"), color=data.get("color")
        )
        return jsonify({"success": True, "message": "Đã cập nhật cột."})

    @app.route("/api/board/columns/<int:column_id>", methods=["DELETE"], endpoint="delete_column")
    @api_view
    def delete_column(column_id: int):
        _, role, team_id = _actor()
        container.task_board_service.delete_column(current_role=role, team_id=team_id, column_id=column_id)
        return jsonify({"success": True, "message": "Đã xóa cột."})

    @app.route("/api/board/tasks", methods=["POST"], endpoint="create_task")
    @api_view
    def create_task():
        user_id, role, team_id = _actor()
        data = json_body()
        task_id = container.task_board_service.create_task(
            current_role=role,
            creator_id=user_id,
            team_id=team_id,
            column_id=require_positive_id(data.get("column_id"), "Cột"),
            title=data.get("title", ""),
            priority=data.get("priority"),
            description=data.get("description"),
            deadline=data.get("deadline"),
            assignee_id=data.get("assignee_id"),
            group_id=data.get("group_id"),
            space_id=data.get("space_id"),
        )
        return jsonify({"success": True, "task_id": task_id, "message": "Công việc đã được tạo"}), 201

    @app.route("/api/board/tasks/<int:task_id>", methods=["PATCH"], endpoint="update_task")
    @api_view
    def update_task(task_id: int):
        _, role, team_id = _actor()
        task = container.task_board_service.update_task(
            current_role=role, team_id=team_id, task_id=task_id, changes=json_body()
        )
        return jsonify({"success": True, "task_id": task.task_id, "status": task.status})

    @app.route("/api/board/tasks/<int:task_id>", methods=["DELETE"], endpoint="delete_task")
    @api_view
    def delete_task(task_id: int):
        _, role, team_id = _actor()
        container.task_board_service.delete_task(current_role=role, team_id=team_id, task_id=task_id)
        return jsonify({"success": True, "message": "Công việc đã bị xóa"})

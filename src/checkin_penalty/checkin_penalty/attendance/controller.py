from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/triggers/attendance-records/<record_id>", methods=["POST"], endpoint="attendance_record_created")
    def attendance_record_created(record_id: str):
        """Called once per newly created attendance record.

        Always answers 200 so the delivering infrastructure does not retry a
        record we already looked at; outcomes are visible in the logs.
        """
        payload = request.get_json(silent=True)
        outcome = container.checkin_processor.handle(payload, record_id=record_id)
        return jsonify(
            {
                "recordId": outcome.record_id or record_id,
                "status": outcome.status.value,
                "isLate": outcome.is_late,
            }
        ), 200

    @app.route("/healthz", methods=["GET"], endpoint="healthz")
    def healthz():
        return jsonify({"status": "ok"}), 200

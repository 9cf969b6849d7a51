"""HTTP routes exposing the scheduler service as a JSON API."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, TypeVar

from flask import Flask, jsonify, request

from .models import Availability, Event, ModelError, User
from .service import SchedulerService, ServiceError

_Record = TypeVar("_Record", User, Event, Availability)


class _BindError(ValueError):
    """Raised when a request body cannot be read as the expected record."""


def _bind(cls: type[_Record]) -> _Record:
    raw = request.get_data(as_text=True)
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise _BindError(f"invalid JSON: {exc}") from exc
    if payload is None:
        payload = {}
    try:
        return cls.from_dict(payload)
    except ModelError as exc:
        raise _BindError(str(exc)) from exc


def _error(message: str, status: HTTPStatus) -> tuple[Any, HTTPStatus]:
    return jsonify({"error": message}), status


def create_app(service: SchedulerService) -> Flask:
    """Build a Flask application serving the scheduler API."""
    app = Flask(__name__)
    app.json.sort_keys = False

    # ----- health -----

    @app.get("/ping")
    def health_check():
        return jsonify({"status": "ok"}), HTTPStatus.OK

    # ----- users -----

    @app.get("/user/<user_id>")
    def get_user(user_id: str):
        try:
            user = service.get_user(user_id)
        except ServiceError as exc:
            return _error(str(exc), HTTPStatus.NOT_FOUND)
        return jsonify(user.to_dict()), HTTPStatus.OK

    @app.get("/users")
    def get_all_users():
        try:
            users = service.get_all_users()
        except ServiceError as exc:
            return _error(str(exc), HTTPStatus.INTERNAL_SERVER_ERROR)
        return jsonify([user.to_dict() for user in users]), HTTPStatus.OK

    @app.post("/user")
    def create_user():
        try:
            user = _bind(User)
        except _BindError as exc:
            return _error(f"invalid request body: {exc}", HTTPStatus.BAD_REQUEST)
        try:
            service.create_user(user)
        except ServiceError as exc:
            return _error(
                f"could not create user: {exc}", HTTPStatus.INTERNAL_SERVER_ERROR
            )
        return jsonify(user.to_dict()), HTTPStatus.CREATED

    # ----- events -----

    @app.get("/event/<event_id>")
    def get_event(event_id: str):
        try:
            event = service.get_event(event_id)
        except ServiceError as exc:
            return _error(str(exc), HTTPStatus.NOT_FOUND)
        return jsonify(event.to_dict()), HTTPStatus.OK

    @app.post("/event")
    def create_event():
        try:
            event = _bind(Event)
            service.create_event(event)
        except (_BindError, ServiceError) as exc:
            return _error(str(exc), HTTPStatus.BAD_REQUEST)
        return jsonify(event.to_dict()), HTTPStatus.CREATED

    @app.put("/event")
    def update_event():
        try:
            event = _bind(Event)
            service.update_event(event)
        except (_BindError, ServiceError) as exc:
            return _error(str(exc), HTTPStatus.BAD_REQUEST)
        return jsonify(event.to_dict()), HTTPStatus.OK

    @app.delete("/event/<event_id>")
    def delete_event(event_id: str):
        try:
            service.delete_event(event_id)
        except ServiceError as exc:
            return _error(str(exc), HTTPStatus.BAD_REQUEST)
        return jsonify({"status": "deleted"}), HTTPStatus.OK

    # ----- availability -----

    @app.get("/event/<event_id>/availability/<user_id>")
    def get_availability(event_id: str, user_id: str):
        try:
            availability = service.get_availability(event_id, user_id)
        except ServiceError:
            return _error("availability not found", HTTPStatus.NOT_FOUND)
        return jsonify(availability.to_dict()), HTTPStatus.OK

    @app.post("/event/availability")
    def add_availability():
        try:
            availability = _bind(Availability)
        except _BindError as exc:
            return _error(str(exc), HTTPStatus.BAD_REQUEST)
        try:
            service.add_availability(availability)
        except ServiceError as exc:
            return _error(str(exc), HTTPStatus.INTERNAL_SERVER_ERROR)
        return jsonify(availability.to_dict()), HTTPStatus.CREATED

    @app.put("/event/availability")
    def update_availability():
        try:
            availability = _bind(Availability)
        except _BindError as exc:
            return _error(str(exc), HTTPStatus.BAD_REQUEST)
        try:
            service.update_availability(availability)
        except ServiceError as exc:
            return _error(str(exc), HTTPStatus.INTERNAL_SERVER_ERROR)
        return jsonify(availability.to_dict()), HTTPStatus.OK

    @app.delete("/event/<event_id>/availability/<user_id>")
    def remove_availability(event_id: str, user_id: str):
        try:
            service.delete_availability(event_id, user_id)
        except ServiceError as exc:
            return _error(str(exc), HTTPStatus.INTERNAL_SERVER_ERROR)
        return jsonify({"status": "deleted"}), HTTPStatus.OK

    # ----- suggestions -----

    @app.get("/event/<event_id>/suggestions")
    def suggest_slots(event_id: str):
        try:
            suggestions = service.suggest_slots(event_id)
        except ServiceError:
            suggestions = []
        payload = [s.to_dict() for s in suggestions] if suggestions else None
        return jsonify({"suggested_slots": payload}), HTTPStatus.OK

    return app
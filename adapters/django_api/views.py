"""
Ticketing Django Adapter Views
==============================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_platform
from core.http_api import handlers
from core.http_api.contracts import CALLER_HEADER
from core.http_api.errors import INVALID_REQUEST, METHOD_NOT_ALLOWED, error_response


def _caller_from_request(request: HttpRequest) -> str | None:
    caller = request.headers.get(CALLER_HEADER)
    if caller is None:
        return None
    return caller.strip() or None


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        METHOD_NOT_ALLOWED,
        "Method not allowed for this endpoint.",
        status=405,
    )


def _dispatch_write(write_handler, request: HttpRequest) -> JsonResponse:
    try:
        body = _parse_json_body(request)
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)

    status, payload = write_handler(
        build_platform(),
        caller=_caller_from_request(request),
        body=body,
    )
    return JsonResponse(payload, status=status)


def _respond(result) -> JsonResponse:
    status, payload = result
    return JsonResponse(payload, status=status)


# ── writes ────────────────────────────────────────────────────

@csrf_exempt
def events_create_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(handlers.post_create_event, request)


@csrf_exempt
def events_deactivate_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(handlers.post_deactivate_event, request)


@csrf_exempt
def tickets_purchase_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(handlers.post_purchase_ticket, request)


@csrf_exempt
def tickets_validate_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(handlers.post_validate_ticket, request)


@csrf_exempt
def tickets_refund_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(handlers.post_refund_ticket, request)


@csrf_exempt
def admin_platform_fee_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(handlers.post_update_platform_fee, request)


@csrf_exempt
def admin_min_ticket_price_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(handlers.post_update_min_ticket_price, request)


# ── reads ─────────────────────────────────────────────────────

@csrf_exempt
def event_detail_view(request: HttpRequest, event_id: int) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(handlers.get_event(build_platform(), event_id=event_id))


@csrf_exempt
def ticket_detail_view(request: HttpRequest, ticket_id: int) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(handlers.get_ticket(build_platform(), ticket_id=ticket_id))


@csrf_exempt
def user_tickets_view(request: HttpRequest, identity: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(handlers.get_user_tickets(build_platform(), identity=identity))


@csrf_exempt
def organizer_detail_view(request: HttpRequest, identity: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(handlers.get_organizer(build_platform(), identity=identity))


@csrf_exempt
def platform_fee_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(
        handlers.get_platform_fee(build_platform(), amount_raw=request.GET.get("amount"))
    )

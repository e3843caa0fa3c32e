"""Input validators for API payloads.

Each ``validate_*`` function takes the raw JSON body, collects every field
problem into a ``details`` dict and raises a single ``ValidationError``
(HTTP 400) when anything is wrong.  On success it returns a cleaned dict
containing only the accepted keys, ready to be passed to a model
constructor.
"""

from __future__ import annotations

from email_validator import EmailNotValidError, validate_email

from bountyhub.core.exceptions import ValidationError
from bountyhub.models.program import DEFAULT_RESPONSE_TIME_HOURS, PROGRAM_STATUSES
from bountyhub.models.report import REPORT_STATUSES, SEVERITIES
from bountyhub.models.user import USER_TYPES

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72
MAX_COMMENT_LENGTH = 10_000
MAX_TAG_LENGTH = 50


def _require_object(data) -> dict:
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _text(data: dict, field: str, errors: dict, *, required=True, max_length=None) -> str | None:
    value = data.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            errors[field] = "required"
        return None
    if not isinstance(value, str):
        errors[field] = "must be a string"
        return None
    value = value.strip()
    if max_length and len(value) > max_length:
        errors[field] = f"must be at most {max_length} characters"
        return None
    return value


def _non_negative_int(data: dict, field: str, errors: dict, *, required=False) -> int | None:
    value = data.get(field)
    if value is None:
        if required:
            errors[field] = "required"
        return None
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        errors[field] = "must be an integer"
        return None
    if value < 0:
        errors[field] = "must be zero or greater"
        return None
    return value


def _choice(data: dict, field: str, allowed, errors: dict, *, default=None) -> str | None:
    value = data.get(field, default)
    # JSON lists and objects are unhashable; only strings can name a choice
    if not isinstance(value, str) or value not in allowed:
        errors[field] = f"must be one of {sorted(allowed)}"
        return None
    return value


def _raise_if(errors: dict) -> None:
    if errors:
        fields = ", ".join(sorted(errors))
        raise ValidationError(f"Validation failed: {fields}", details=errors)


# ── Users ────────────────────────────────────────────────────────────────────

def validate_registration(data) -> dict:
    data = _require_object(data)
    errors: dict = {}

    username = _text(data, "username", errors, max_length=50)
    if username is not None and len(username) < 3:
        errors["username"] = "must be at least 3 characters"

    email = _text(data, "email", errors, max_length=200)
    if email is not None:
        try:
            email = validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError as exc:
            errors["email"] = str(exc)

    password = data.get("password")
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"must be at least {MIN_PASSWORD_LENGTH} characters"
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        # bcrypt only accepts 72 bytes of input
        errors["password"] = f"must be at most {MAX_PASSWORD_BYTES} bytes"

    full_name = _text(data, "full_name", errors, max_length=200)

    user_type = _choice(data, "user_type", USER_TYPES, errors)

    bio = _text(data, "bio", errors, required=False)
    avatar_url = _text(data, "avatar_url", errors, required=False, max_length=500)

    _raise_if(errors)
    return {
        "username": username,
        "email": email,
        "password": password,
        "full_name": full_name,
        "user_type": user_type,
        "bio": bio or "",
        "avatar_url": avatar_url or "",
    }


# ── Programs ─────────────────────────────────────────────────────────────────

def validate_rewards(rewards, errors: dict) -> dict:
    """Rewards map: severity tier → non-negative integer amount."""
    if rewards is None:
        return {}
    if not isinstance(rewards, dict):
        errors["rewards"] = "must be an object mapping severity to amount"
        return {}
    cleaned = {}
    for severity, amount in rewards.items():
        if severity not in SEVERITIES:
            errors["rewards"] = f"unknown severity '{severity}'"
            return {}
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            errors["rewards"] = f"amount for '{severity}' must be a non-negative integer"
            return {}
        cleaned[severity] = amount
    return cleaned


def validate_tags(tags, errors: dict) -> list[str]:
    if tags is None:
        return []
    if not isinstance(tags, list):
        errors["tags"] = "must be a list of strings"
        return []
    cleaned = []
    for tag in tags:
        if not isinstance(tag, str) or not tag.strip():
            errors["tags"] = "tags must be non-empty strings"
            return []
        if len(tag.strip()) > MAX_TAG_LENGTH:
            errors["tags"] = f"tags must be at most {MAX_TAG_LENGTH} characters"
            return []
        cleaned.append(tag.strip())
    return cleaned


def validate_program(data) -> dict:
    data = _require_object(data)
    errors: dict = {}

    cleaned = {
        "title": _text(data, "title", errors, max_length=300),
        "description": _text(data, "description", errors),
        "industry": _text(data, "industry", errors, max_length=100),
        "scope": _text(data, "scope", errors),
        "rules": _text(data, "rules", errors),
    }
    rewards = validate_rewards(data.get("rewards"), errors)
    cleaned["rewards"] = rewards

    min_bounty = _non_negative_int(data, "min_bounty", errors)
    max_bounty = _non_negative_int(data, "max_bounty", errors)
    if min_bounty is None:
        min_bounty = min(rewards.values()) if rewards else 0
    if max_bounty is None:
        max_bounty = max(rewards.values()) if rewards else 0
    if min_bounty > max_bounty and "min_bounty" not in errors and "max_bounty" not in errors:
        errors["min_bounty"] = "must not exceed max_bounty"
    cleaned["min_bounty"] = min_bounty
    cleaned["max_bounty"] = max_bounty

    cleaned["status"] = _choice(data, "status", PROGRAM_STATUSES, errors, default="active")

    response_time = _non_negative_int(data, "response_time", errors)
    if response_time == 0:
        errors["response_time"] = "must be greater than zero"
    cleaned["response_time"] = response_time or DEFAULT_RESPONSE_TIME_HOURS

    cleaned["tags"] = validate_tags(data.get("tags"), errors)

    _raise_if(errors)
    return cleaned


def validate_program_status(data) -> str:
    data = _require_object(data)
    errors: dict = {}
    status = _choice(data, "status", PROGRAM_STATUSES, errors)
    if errors:
        raise ValidationError(
            f"status must be one of {sorted(PROGRAM_STATUSES)}",
            details={"status": "invalid"},
        )
    return status


# ── Reports ──────────────────────────────────────────────────────────────────

def validate_report(data) -> dict:
    data = _require_object(data)
    errors: dict = {}

    program_id = data.get("program_id")
    if program_id is None:
        errors["program_id"] = "required"
    elif isinstance(program_id, bool) or not isinstance(program_id, int):
        errors["program_id"] = "must be an integer"

    cleaned = {
        "program_id": program_id,
        "title": _text(data, "title", errors, max_length=300),
        "description": _text(data, "description", errors),
        "steps_to_reproduce": _text(data, "steps_to_reproduce", errors),
        "impact": _text(data, "impact", errors),
    }

    cleaned["severity"] = _choice(data, "severity", SEVERITIES, errors)

    _raise_if(errors)
    return cleaned


def validate_status_update(data) -> dict:
    data = _require_object(data)
    errors: dict = {}

    status = _choice(data, "status", REPORT_STATUSES, errors)

    triage_notes = data.get("triage_notes")
    if triage_notes is not None and not isinstance(triage_notes, str):
        errors["triage_notes"] = "must be a string"

    reward_amount = _non_negative_int(data, "reward_amount", errors)

    _raise_if(errors)
    return {"status": status, "triage_notes": triage_notes, "reward_amount": reward_amount}


def validate_reward(data) -> int:
    data = _require_object(data)
    errors: dict = {}
    amount = _non_negative_int(data, "amount", errors, required=True)
    _raise_if(errors)
    return amount


def validate_comment(data) -> str:
    data = _require_object(data)
    errors: dict = {}
    content = _text(data, "content", errors, max_length=MAX_COMMENT_LENGTH)
    _raise_if(errors)
    return content


# ── Resources ────────────────────────────────────────────────────────────────

def validate_resource(data) -> dict:
    data = _require_object(data)
    errors: dict = {}
    cleaned = {
        "title": _text(data, "title", errors, max_length=300),
        "description": _text(data, "description", errors),
        "content": _text(data, "content", errors),
        "category": _text(data, "category", errors, max_length=100),
    }
    _raise_if(errors)
    return cleaned

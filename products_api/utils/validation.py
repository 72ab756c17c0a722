"""
Declarative request validation.

Routes declare an ordered list of field chains, e.g.::

    validate(
        param("id").is_int("Invalid ID.").to_int(),
        body("name").not_empty("Product name cannot be empty."),
    )

Every rule of every chain is evaluated, violations are collected into one
list, and the resulting dependency raises ``RequestValidationFailed`` if the
list is not empty. The route handler only runs when all rules pass.
"""
import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from fastapi import Request

logger = logging.getLogger(__name__)

PATH = "path"
BODY = "body"

DEFAULT_MESSAGE = "Invalid value."

INT_PATTERN = re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$")
NUMERIC_PATTERN = re.compile(r"^[-+]?(?:[0-9]*\.)?[0-9]+$")

TRUE_VALUES = ("true", "1")
FALSE_VALUES = ("false", "0")


@dataclass
class ValidationRule:
    """A predicate over one field value and the message used when it fails."""
    check: Callable[[Any], bool]
    message: str

    def passes(self, value: Any) -> bool:
        try:
            return bool(self.check(value))
        except (TypeError, ValueError):
            return False


@dataclass
class FieldViolation:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class RequestValidationFailed(Exception):
    """Raised when at least one validation rule of a route failed."""

    def __init__(self, errors: list[FieldViolation]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


def _is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and INT_PATTERN.match(value) is not None


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    return isinstance(value, str) and NUMERIC_PATTERN.match(value) is not None


def _not_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, dict)):
        return len(value) > 0
    return True


def _is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, int):
        return value in (0, 1)
    return isinstance(value, str) and value in TRUE_VALUES + FALSE_VALUES


def _to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value in TRUE_VALUES
    return bool(value)


class FieldChain:
    """
    Ordered validation rules and sanitizers for one field of one location.
    """

    def __init__(self, location: str, field: str):
        self.location = location
        self.field = field
        self.rules: list[ValidationRule] = []
        self.sanitizers: list[Callable[[Any], Any]] = []

    def _add(self, check: Callable[[Any], bool], message: Optional[str]) -> "FieldChain":
        self.rules.append(ValidationRule(check, message or DEFAULT_MESSAGE))
        return self

    def is_int(self, message: str = None) -> "FieldChain":
        return self._add(_is_int, message)

    def is_string(self, message: str = None) -> "FieldChain":
        return self._add(_is_string, message)

    def is_numeric(self, message: str = None) -> "FieldChain":
        return self._add(_is_numeric, message)

    def not_empty(self, message: str = None) -> "FieldChain":
        return self._add(_not_empty, message)

    def is_boolean(self, message: str = None) -> "FieldChain":
        return self._add(_is_boolean, message)

    def custom(self, check: Callable[[Any], bool], message: str = None) -> "FieldChain":
        return self._add(check, message)

    def to_int(self) -> "FieldChain":
        self.sanitizers.append(int)
        return self

    def to_float(self) -> "FieldChain":
        self.sanitizers.append(float)
        return self

    def to_boolean(self) -> "FieldChain":
        self.sanitizers.append(_to_boolean)
        return self

    def run(self, source: dict) -> tuple[Any, list[FieldViolation]]:
        """
        Evaluate every rule against the field value found in ``source``.

        Returns:
            Tuple of (sanitized value, violations). The value is only
            sanitized when there are no violations.
        """
        # A missing field is checked as None, so every built-in rule fails
        value = source.get(self.field)
        errors = [
            FieldViolation(self.field, rule.message)
            for rule in self.rules
            if not rule.passes(value)
        ]
        if errors:
            return value, errors

        for sanitize in self.sanitizers:
            value = sanitize(value)
        return value, []


def param(field: str) -> FieldChain:
    """Start a rule chain for a path parameter."""
    return FieldChain(PATH, field)


def body(field: str) -> FieldChain:
    """Start a rule chain for a JSON body field."""
    return FieldChain(BODY, field)


async def read_json_body(request: Request) -> dict:
    """
    Parse the request body as a JSON object.

    An empty body or a JSON value that is not an object yields an empty dict.

    Raises:
        RequestValidationFailed: If the body is not valid JSON
    """
    if not (await request.body()).strip():
        return {}
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise RequestValidationFailed([FieldViolation(BODY, "Malformed JSON body.")])
    return data if isinstance(data, dict) else {}


def validate(*chains: FieldChain):
    """
    Build a FastAPI dependency running ``chains`` against the request.

    The dependency returns the sanitized values keyed by field name.
    """
    reads_body = any(chain.location == BODY for chain in chains)

    async def dependency(request: Request) -> dict:
        payload = await read_json_body(request) if reads_body else {}
        sources = {PATH: request.path_params, BODY: payload}

        values = {}
        errors: list[FieldViolation] = []
        for chain in chains:
            value, chain_errors = chain.run(sources[chain.location])
            errors.extend(chain_errors)
            values[chain.field] = value

        if errors:
            logger.info(
                f"Rejected {request.method} {request.url.path}: "
                f"{len(errors)} validation error(s)"
            )
            raise RequestValidationFailed(errors)

        return values

    return dependency

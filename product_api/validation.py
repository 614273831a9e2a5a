# product_api/validation.py

"""
Request validation for the Products API.

Every request field is checked by a `FieldChain`: an ordered list of
`Rule`s (a predicate plus the message reported when it fails). All chains of
a route run to completion and every failed rule becomes one `Violation`, so a
single bad field can contribute several entries. `report_input_errors` then
stops the request with a 400 when anything failed.

Routes consume the pipeline through `validate_request`, which builds a FastAPI
dependency returning a `ValidatedRequest` with the sanitized path params and,
when a schema is given, the typed body payload.
"""

import json
import logging
import math
import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type

from fastapi import Request
from pydantic import BaseModel, ValidationError

from .exceptions import InputValidationError
from .schemas import ProductCreate, ProductReplace, Violation

logger = logging.getLogger(__name__)

_MISSING = object()

_INT_RE = re.compile(r"^[-+]?[0-9]+$")
_NUMERIC_RE = re.compile(r"^[-+]?(?:[0-9]*[.])?[0-9]+$")
_BOOLEAN_TEXT = ("true", "false", "1", "0")
_CENT = Decimal("0.01")


# -----------------------------
# Predicates
# -----------------------------
def as_text(value: Any) -> str:
    """String form of a JSON value as the rules see it."""
    if value is None or value is _MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value):
        # Plain positional notation, never "5e-05"
        return format(Decimal(repr(value)), "f")
    if isinstance(value, (str, int, float)):
        return str(value)
    if not value:
        return ""
    return json.dumps(value)


def as_number(value: Any) -> Optional[float]:
    """Numeric coercion used by comparisons; None when not a number."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return None
    return None


def is_int(value: Any) -> bool:
    return bool(_INT_RE.match(as_text(value)))


def is_numeric(value: Any) -> bool:
    return bool(_NUMERIC_RE.match(as_text(value)))


def not_empty(value: Any) -> bool:
    return as_text(value) != ""


def is_positive(value: Any) -> bool:
    """Greater than zero once rounded to the two decimals the price column keeps."""
    number = as_number(value)
    if number is None or not number > 0:
        return False
    if number >= 1:
        return True
    return Decimal(repr(number)).quantize(_CENT, rounding=ROUND_HALF_UP) > 0


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool) or as_text(value) in _BOOLEAN_TEXT


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return as_text(value) in ("true", "1")


# -----------------------------
# Chains
# -----------------------------
@dataclass(frozen=True)
class Rule:
    check: Callable[[Any], bool]
    message: str


@dataclass(frozen=True)
class FieldChain:
    """Ordered rules for one field found in `location` ("params" or "body")."""

    location: str
    field: str
    rules: Tuple[Rule, ...]
    sanitize: Optional[Callable[[Any], Any]] = None

    def run(self, source: Mapping[str, Any]) -> Tuple[List[Violation], Any]:
        raw = source.get(self.field, _MISSING)
        value = None if raw is _MISSING else raw
        violations = []
        for rule in self.rules:
            if rule.check(value):
                continue
            details = {
                "type": "field",
                "msg": rule.message,
                "path": self.field,
                "location": self.location,
            }
            if raw is not _MISSING:
                details["value"] = raw
            violations.append(Violation(**details))
        if violations or self.sanitize is None:
            return violations, value
        return violations, self.sanitize(value)


def chain(location: str, name: str, *rules: Rule, sanitize=None) -> FieldChain:
    return FieldChain(location=location, field=name, rules=tuple(rules), sanitize=sanitize)


ID_CHAIN = chain("params", "id", Rule(is_int, "ID must be an integer"), sanitize=int)

NAME_CHAIN = chain("body", "name", Rule(not_empty, "Name product is required"))

# The number and presence checks overlap on purpose; clients count on getting
# both entries for a missing price.
PRICE_CHAIN = chain(
    "body",
    "price",
    Rule(is_numeric, "Price product must be a number"),
    Rule(not_empty, "Price product is required"),
    Rule(is_positive, "Price product must be greater than zero"),
)

AVAILABILITY_CHAIN = chain(
    "body",
    "availability",
    Rule(is_boolean, "Availability must be true or false"),
    sanitize=to_bool,
)


@dataclass
class ValidationResult:
    params: Dict[str, Any] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)
    violations: List[Violation] = field(default_factory=list)


def run_chains(
    chains, params: Mapping[str, Any], body: Mapping[str, Any]
) -> ValidationResult:
    """Run every chain against its source and collect all violations in order."""
    result = ValidationResult()
    sources = {"params": params, "body": body}
    targets = {"params": result.params, "body": result.body}
    for field_chain in chains:
        violations, value = field_chain.run(sources[field_chain.location])
        result.violations.extend(violations)
        if not violations:
            targets[field_chain.location][field_chain.field] = value
    return result


# -----------------------------
# Reporter
# -----------------------------
def report_input_errors(violations: List[Violation]) -> None:
    """Stop the request with a 400 when any rule failed."""
    if violations:
        logger.debug(
            "Rejecting request with %d violation(s): %s",
            len(violations),
            [v.msg for v in violations],
        )
        raise InputValidationError(violations)


def schema_violations(exc: ValidationError, body: Mapping[str, Any]) -> List[Violation]:
    """Express pydantic errors in the same shape as rule violations."""
    violations = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or None
        details = {"type": "field", "msg": error["msg"], "path": path, "location": "body"}
        if path in body:
            details["value"] = body[path]
        violations.append(Violation(**details))
    return violations


# -----------------------------
# FastAPI integration
# -----------------------------
@dataclass
class ValidatedRequest:
    params: Dict[str, Any]
    payload: Optional[BaseModel] = None

    @property
    def product_id(self) -> int:
        return self.params["id"]


def is_json_request(request: Request) -> bool:
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_json_body(request: Request) -> Dict[str, Any]:
    # Bodies sent as anything but JSON carry no fields
    if not is_json_request(request):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise InputValidationError(
            [Violation(type="body", msg="Request body must be valid JSON", location="body")]
        )
    # Arrays and scalars carry no named fields
    return data if isinstance(data, dict) else {}


def validate_request(*chains: FieldChain, schema: Optional[Type[BaseModel]] = None):
    """Build a dependency that validates a request before the route runs."""
    reads_body = any(c.location == "body" for c in chains)

    async def dependency(request: Request) -> ValidatedRequest:
        body = await read_json_body(request) if reads_body else {}
        result = run_chains(chains, params=request.path_params, body=body)
        report_input_errors(result.violations)

        payload = None
        if schema is not None:
            try:
                payload = schema.model_validate(result.body)
            except ValidationError as exc:
                report_input_errors(schema_violations(exc, body))
        return ValidatedRequest(params=result.params, payload=payload)

    return dependency


validate_id = validate_request(ID_CHAIN)
validate_create = validate_request(NAME_CHAIN, PRICE_CHAIN, schema=ProductCreate)
validate_replace = validate_request(
    ID_CHAIN, NAME_CHAIN, PRICE_CHAIN, AVAILABILITY_CHAIN, schema=ProductReplace
)

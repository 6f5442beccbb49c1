# backend/dashboard/state.py
"""
Immutable page state: form values, the auto/manual slug machine, and
declarative validation rules.

Every update returns a new object; pages swap their reference instead of
mutating in place.
"""
import enum
from collections import namedtuple
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .utils import slug_from_title


@dataclass(frozen=True)
class FormState:
    values: Mapping[str, Any] = field(default_factory=dict)
    errors: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def seeded(cls, fields: Iterable[str], source: Optional[Mapping[str, Any]] = None, defaults=None):
        """
        Build a form from ``source``; each field falls back to ``defaults``
        on its own when the stored value is falsy.
        """
        source = source or {}
        defaults = defaults or {}
        values = {}
        for name in fields:
            value = source.get(name)
            if not value and name in defaults:
                value = defaults[name]
            values[name] = value
        return cls(values=values)

    def get(self, name: str, default=None):
        return self.values.get(name, default)

    def set_field(self, name: str, value) -> "FormState":
        values = dict(self.values)
        values[name] = value
        errors = {k: v for k, v in self.errors.items() if k != name}
        return replace(self, values=values, errors=errors)

    def with_errors(self, errors: Mapping[str, str]) -> "FormState":
        return replace(self, errors=dict(errors))

    @property
    def is_valid(self) -> bool:
        return not self.errors


class SlugMode(enum.Enum):
    AUTO = "auto"
    MANUAL = "manual"


@dataclass(frozen=True)
class SlugState:
    value: str = ""
    mode: SlugMode = SlugMode.MANUAL

    @property
    def auto(self) -> bool:
        return self.mode is SlugMode.AUTO

    def on_title_change(self, title: str) -> "SlugState":
        if self.auto and title:
            return replace(self, value=slug_from_title(title))
        return self

    def on_slug_edit(self, text: str) -> "SlugState":
        return SlugState(value=text or "", mode=SlugMode.MANUAL)

    def toggle(self, enabled: bool, title: str = "") -> "SlugState":
        if not enabled:
            return replace(self, mode=SlugMode.MANUAL)
        return SlugState(value=self.value, mode=SlugMode.AUTO).on_title_change(title)


# (field, predicate, message); predicate gets the raw field value
Rule = namedtuple("Rule", "field predicate message")


def required(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _as_number(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return None


def is_whole_number(value) -> bool:
    if not required(value):
        return True
    number = _as_number(value)
    return number is not None and float(number).is_integer()


def at_least(bound) -> Callable[[Any], bool]:
    def check(value):
        number = _as_number(value)
        return number is None or number >= bound
    return check


def at_most(bound) -> Callable[[Any], bool]:
    def check(value):
        number = _as_number(value)
        return number is None or number <= bound
    return check


def validate(rules: Iterable[Rule], values: Mapping[str, Any]) -> Dict[str, str]:
    """Run rules in order; the first failing rule of each field wins."""
    errors = {}
    for rule in rules:
        if rule.field in errors:
            continue
        if not rule.predicate(values.get(rule.field)):
            errors[rule.field] = rule.message
    return errors

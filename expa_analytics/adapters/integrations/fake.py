"""Fake analytics integration for testing."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RecordedCall:
    """Single recorded integration call."""

    method: str
    args: Dict[str, Any] = field(default_factory=dict)


class FakeIntegration:
    """In-memory test double for the AnalyticsIntegration protocol.

    Records every call for assertions. ``fail_on`` names methods that
    should raise, to exercise dispatcher error isolation.

    Usage:
        fake = FakeIntegration("Fake")
        analytics.add_integration(fake)
        analytics.track("Signed Up")
        assert fake.has("track")
    """

    def __init__(self, name: str = "Fake", valid: bool = True, fail_on: tuple = ()) -> None:
        """Initialize with an empty call list."""
        self.name = name
        self.calls: list[RecordedCall] = []
        self.settings: Dict[str, Any] = {}
        self.valid = valid
        self.started = False
        self.flush_count = 0
        self.closed = False
        self._fail_on = set(fail_on)

    @property
    def enabled(self) -> bool:
        return self.valid and self.started

    def _record(self, method: str, **args: Any) -> None:
        if method in self._fail_on:
            raise RuntimeError(f"{self.name}.{method} failed")
        self.calls.append(RecordedCall(method=method, args=args))

    def update_settings(self, settings: Dict[str, Any]) -> None:
        self.settings = dict(settings)

    def validate(self) -> bool:
        return self.valid

    def start(self) -> None:
        self.started = self.valid

    def identify(self, user_id: Optional[str], traits: Optional[Dict[str, Any]] = None) -> None:
        self._record("identify", user_id=user_id, traits=traits or {})

    def track(self, event: str, properties: Optional[Dict[str, Any]] = None) -> None:
        self._record("track", event=event, properties=properties or {})

    def screen(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        self._record("screen", name=name, properties=properties or {})

    def group(self, group_id: str, traits: Optional[Dict[str, Any]] = None) -> None:
        self._record("group", group_id=group_id, traits=traits or {})

    def alias(self, new_id: str) -> None:
        self._record("alias", new_id=new_id)

    def reset(self) -> None:
        self._record("reset")

    async def flush(self) -> None:
        self._record("flush")
        self.flush_count += 1

    async def aclose(self) -> None:
        self.closed = True

    # Test helpers

    def has(self, method: str) -> bool:
        """Return True if the method was called at least once."""
        return any(c.method == method for c in self.calls)

    def get(self, method: str) -> RecordedCall:
        """Return the first call to ``method``, or raise AssertionError."""
        for c in self.calls:
            if c.method == method:
                return c
        raise AssertionError(
            f"No call to '{method}' recorded. Recorded: {[c.method for c in self.calls]}"
        )

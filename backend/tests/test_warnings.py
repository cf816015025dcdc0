import warnings

import pytest


def _emitted(message: str) -> int:
    with warnings.catch_warnings(record=True) as caught:
        warnings.warn(message, DeprecationWarning)
    return len(caught)


@pytest.mark.parametrize(
    "message",
    [
        "\n        on_event is deprecated, use lifespan event handlers instead.\n",
        "The `on_event` decorator is deprecated, and will be removed in version 1.0.0.",
        "datetime.datetime.utcnow() is deprecated and scheduled for removal in a future version.",
    ],
)
def test_known_deprecations_are_silenced(message):
    assert _emitted(message) == 0


def test_other_deprecations_still_surface():
    assert _emitted("Model.dict() is deprecated; use model_dump()") == 1

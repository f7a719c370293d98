from __future__ import annotations

from collections.abc import Callable

import pytest


@pytest.fixture()
def notifications() -> list[tuple[str, int]]:
    return []


@pytest.fixture()
def notify(notifications: list[tuple[str, int]]) -> Callable[[str, int], None]:
    def collect(message: str, level: int) -> None:
        notifications.append((message, level))

    return collect

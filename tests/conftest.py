from __future__ import annotations

import pytest

from tests.helpers import cell, payload


@pytest.fixture
def two_by_two_payload() -> dict:
    return payload(
        [
            [cell("A"), cell("B", hyperlink="https://x")],
            [cell(""), cell("D", fmt={"textFormat": {"bold": True}})],
        ]
    )

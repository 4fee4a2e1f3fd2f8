"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from collections.abc import Iterator

import pytest
from loguru import logger

from analytics_core.analysis.compliance import parse_compliance_data
from analytics_core.analysis.types import ComplianceData


@pytest.fixture
def loguru_messages() -> Iterator[list[str]]:
    """Capture loguru records emitted during a test.

    Yields:
        List of "LEVEL|message" strings, appended as records are emitted
    """
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(f"{message.record['level'].name}|{message.record['message']}"), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def raw_compliance_payload() -> dict:
    """Backend-shaped compliance payload with camelCase keys."""
    return {
        "defaultWindowKey": "30d",
        "windows": [
            {
                "key": "7d",
                "label": "7 days",
                "sessions": [
                    {
                        "id": "s-3",
                        "label": "Tempo Bike",
                        "href": "/calendar?sessionId=s-3",
                        "date": "2026-02-11",
                        "planBlock": " Build ",
                        "modality": " Endurance ",
                        "state": "moved",
                    },
                    {
                        "id": "s-1",
                        "label": "Back Squat",
                        "href": "/calendar?sessionId=s-1",
                        "date": "2026-02-10",
                        "planBlock": "Base",
                        "modality": "Strength",
                        "state": "completed",
                    },
                    {
                        "id": "s-2",
                        "label": "Accessory Circuit",
                        "href": "/calendar?sessionId=s-2",
                        "date": "2026-02-10",
                        "planBlock": "Base",
                        "modality": "strength",
                        "state": "unknown",
                    },
                    {
                        "id": "s-4",
                        "label": "Long Run",
                        "href": "/calendar?sessionId=s-4",
                        "date": "2026-02-12",
                        "planBlock": "Build",
                        "modality": "Endurance",
                        "state": "skipped",
                    },
                ],
            },
            {
                "key": "30d",
                "label": "30 days",
                "sessions": [],
            },
        ],
    }


@pytest.fixture
def compliance_data(raw_compliance_payload: dict) -> ComplianceData:
    return parse_compliance_data(raw_compliance_payload)

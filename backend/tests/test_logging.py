"""
Tests for structured logging context.
"""
import pytest
from loguru import logger

from design_dna.utils.logging import get_logger
from generate_test_images import encode, solid_image


@pytest.fixture
def captured_records():
    """Collect loguru records emitted during a test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


def test_bound_context_is_attached(captured_records):
    request_logger = get_logger().bind(request_id="extract-1", source="upload")

    request_logger.info("Starting color extraction")
    request_logger.warning("Image decode failed", extra={"stage": "decode"})

    first, second = captured_records[-2:]
    assert first["extra"] == {"request_id": "extract-1", "source": "upload"}
    assert second["extra"] == {"request_id": "extract-1", "source": "upload", "stage": "decode"}
    assert second["level"].name == "WARNING"


def test_bind_does_not_leak_into_parent(captured_records):
    root = get_logger()
    root.bind(request_id="extract-2")

    root.info("Design DNA backend initialized")

    assert captured_records[-1]["extra"] == {}


def test_records_point_at_caller(captured_records):
    get_logger().info("caller check")
    assert captured_records[-1]["function"] == "test_records_point_at_caller"


def test_extract_request_lines_share_request_id(test_client, captured_records):
    files = {"file": ("design.png", encode(solid_image((8, 8), (0, 0, 0))), "image/png")}

    response = test_client.post("/v1/colors/extract", files=files)

    request_id = response.json()["debug"]["request_id"]
    request_lines = [r for r in captured_records if r["extra"].get("request_id") == request_id]
    assert [r["message"] for r in request_lines] == [
        "Starting color extraction",
        "Color extraction completed successfully",
    ]
    assert request_lines[-1]["extra"]["result"] == "ok"

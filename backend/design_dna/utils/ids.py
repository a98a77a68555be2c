"""
Design DNA Request ID Utilities
Generate unique request IDs for tracing.
"""
import uuid
from datetime import datetime


def generate_request_id(prefix: str = "dna") -> str:
    """
    Generate a unique request ID for tracking.

    Args:
        prefix: Short tag naming the operation (e.g. "extract", "cluster")

    Returns:
        Unique request ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"


"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional


def format_response(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    """Format a successful API response envelope."""
    return {
        "success": True,
        "message": message,
        "data": data
    }


def format_error(message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    """Format an error response envelope."""
    response = {"success": False, "message": message}
    if details is not None:
        response["error"] = details
    return response

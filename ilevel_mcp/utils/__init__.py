from .response_utils import decode_body, format_payload

__all__ = ["decode_body", "format_payload"]

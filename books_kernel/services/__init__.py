"""Services for the books kernel (write side)."""

from books_kernel.services.auditor_service import AuditorService

__all__ = [
    "AuditorService",
]

"""
Document numbering: sequential PREFIX-NNNN identifiers for quotes and invoices.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import FormatError
from app.db.repositories.document_sequence_repository import DocumentSequenceRepository
from app.models.document_sequence import DocumentSeries
from app.services.base_service import BaseService

logger = logging.getLogger(__name__)

NUMBER_WIDTH = 4


def next_document_number(prefix: str, last_issued_number: Optional[str]) -> str:
    """
    Compute the number that follows ``last_issued_number``.

    ``QT`` + None -> ``QT-0001``; ``QT`` + ``QT-0042`` -> ``QT-0043``;
    ``QT`` + ``QT-9999`` -> ``QT-10000``. The numeric suffix is whatever
    follows the last ``-``; the result always carries ``prefix``.

    Raises:
        FormatError: the suffix of ``last_issued_number`` is not an integer
    """
    if not last_issued_number:
        return f"{prefix}-{1:0{NUMBER_WIDTH}d}"

    suffix = last_issued_number.rsplit("-", 1)[-1].strip()
    # isdigit alone admits superscripts and other non-ASCII digits
    if not (suffix.isascii() and suffix.isdigit()):
        raise FormatError(
            f"Cannot parse document number suffix of {last_issued_number!r}",
            details={"last_number": last_issued_number},
        )
    return f"{prefix}-{int(suffix) + 1:0{NUMBER_WIDTH}d}"


class NumberingService(BaseService):
    """Issues numbers from the locked per-series counter row."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.sequence_repo = DocumentSequenceRepository(session)

    async def issue_number(self, series: DocumentSeries, prefix: str) -> str:
        """
        Issue the next number of ``series`` inside the caller's transaction.

        The counter row stays locked until the caller commits or rolls back,
        so the number and the document that carries it land together.
        """
        sequence = await self.sequence_repo.get_for_update(series.value)
        if sequence is None:
            sequence = await self.sequence_repo.create(series.value)

        try:
            number = next_document_number(prefix, sequence.last_number)
        except FormatError:
            logger.error(
                f"Corrupt numbering state for series {series.value}",
                extra={"series": series.value, "last_number": sequence.last_number},
            )
            raise

        await self.sequence_repo.set_last_number(sequence, number)
        logger.info(f"Issued {series.value} number {number}")
        return number

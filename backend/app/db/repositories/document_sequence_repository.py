"""
Document sequence repository: the locked counter rows behind numbering.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.models.document_sequence import DocumentSequence


class DocumentSequenceRepository:
    """Repository for per-series counter rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_update(self, series: str) -> Optional[DocumentSequence]:
        """Fetch the series row with a row lock held until commit/rollback."""
        result = await self.session.execute(
            select(DocumentSequence)
            .where(DocumentSequence.series == series)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, series: str) -> DocumentSequence:
        """Create an empty counter row for a series."""
        sequence = DocumentSequence(series=series, last_number=None)
        self.session.add(sequence)
        await self.session.flush()
        return sequence

    async def set_last_number(self, sequence: DocumentSequence, number: str) -> DocumentSequence:
        """Record the number just issued."""
        sequence.last_number = number
        await self.session.flush()
        return sequence

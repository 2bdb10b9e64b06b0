from __future__ import annotations

import logging
from datetime import UTC, datetime, time, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rate_api.models import SingleRate

logger = logging.getLogger(__name__)


class RateRecorder:
    """Keeps at most one historical rate per currency pair per UTC day."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record_rate(
        self,
        from_currency: str,
        to_currency: str,
        rate: float,
        date: datetime | None = None,
    ) -> bool:
        recorded_at = _as_utc(date) if date is not None else datetime.now(UTC)
        day_start = datetime.combine(recorded_at.date(), time.min, tzinfo=UTC)
        day_end = day_start + timedelta(days=1)
        source = from_currency.upper()
        target = to_currency.upper()

        async with self._session_factory() as session:
            existing_stmt = (
                select(SingleRate.id)
                .where(
                    SingleRate.from_currency == source,
                    SingleRate.to_currency == target,
                    SingleRate.date >= day_start,
                    SingleRate.date < day_end,
                )
                .limit(1)
            )
            if (await session.execute(existing_stmt)).scalar_one_or_none() is not None:
                return False

            session.add(
                SingleRate(
                    from_currency=source,
                    to_currency=target,
                    amount_to=rate,
                    date=recorded_at,
                )
            )
            await session.commit()
        logger.debug("Recorded rate from=%s to=%s rate=%s", source, target, rate)
        return True


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)

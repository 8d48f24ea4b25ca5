# backend/gestor_ordenes/crud/email_log_crud.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.db.models.email_log_model import EmailLog


async def create_email_log(
    db: AsyncSession,
    to: str,
    subject: str,
    status: str,
    attempts: int = 1,
    error: Optional[str] = None,
) -> EmailLog:
    db_log = EmailLog(to=to, subject=subject, status=status, attempts=attempts, error=error)
    db.add(db_log)
    await db.commit()
    await db.refresh(db_log)
    return db_log


async def get_email_logs(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[EmailLog]:
    """Logs más recientes primero."""
    result = await db.execute(
        select(EmailLog)
        .order_by(EmailLog.created_at.desc(), EmailLog.id.desc())
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_email_log(db: AsyncSession, log_id: int) -> Optional[EmailLog]:
    return await db.get(EmailLog, log_id)

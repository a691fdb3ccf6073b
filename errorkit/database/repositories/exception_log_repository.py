from psycopg.rows import dict_row

from errorkit.database.connection import get_connection
from errorkit.database.models import ExceptionLogRecord


class ExceptionLogRepository:
    """Database operations for the exception_logs table."""

    async def insert(
        self,
        *,
        error_type: str,
        error_message: str,
        severity: str,
        stack_trace: str | None = None,
        record_id: str | None = None,
        context: str | None = None,
    ) -> int:
        """Insert one exception log row and return its id."""
        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO exception_logs
                        (error_type, error_message, stack_trace, record_id,
                         severity, context, created_at)
                    VALUES (%s, %s, %s, %s, %s, %s, NOW())
                    RETURNING id
                    """,
                    (
                        str(error_type),
                        error_message,
                        stack_trace,
                        record_id,
                        str(severity),
                        context,
                    ),
                )
                row = await cur.fetchone()
            await conn.commit()

        if row is None:
            raise RuntimeError("INSERT into exception_logs returned no id")
        return int(row[0])

    async def find_by_id(self, log_id: int) -> ExceptionLogRecord | None:
        """Find an exception log row by id. Useful for tests."""
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    """
                    SELECT id, error_type, error_message, stack_trace, record_id,
                           severity, context, created_at
                    FROM exception_logs
                    WHERE id = %s
                    """,
                    (log_id,),
                )
                row = await cur.fetchone()

        if row is None:
            return None

        return ExceptionLogRecord(
            id=row["id"],
            error_type=row["error_type"],
            error_message=row["error_message"],
            severity=row["severity"],
            stack_trace=row["stack_trace"],
            record_id=row["record_id"],
            context=row["context"],
            created_at=row["created_at"],
        )

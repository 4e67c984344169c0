# freshconnect/utils/retry.py
from sqlalchemy.exc import OperationalError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type


def db_retry(attempts: int = 3):
    # lock wait timeout, deadlock and sqlite "database is locked" all surface
    # as OperationalError; the wrapped call must start its own transaction
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
        retry=retry_if_exception_type(OperationalError),
    )

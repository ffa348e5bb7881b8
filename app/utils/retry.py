# app/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_random_exponential, retry_if_exception_type

from app.domain.errors import CartConflictError
from app.utils.settings import CART_SAVE_ATTEMPTS


#read-modify-write jest powtarzany w calosci, wiec kazda proba czyta swieza wersje
#losowy backoff - rownolegle requesty nie trafiaja znowu w ten sam moment
def conflict_retry(attempts: int = CART_SAVE_ATTEMPTS):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_random_exponential(multiplier=0.02, max=0.5),
        retry=retry_if_exception_type(CartConflictError),
    )

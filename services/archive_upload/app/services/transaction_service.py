import logging
from typing import List

from schemas.transaction import Transaction
from services.content_store import ContentStore

logger = logging.getLogger(__name__)

UNCATEGORIZED = -1

# Fixed response for /get_transaction. Nothing here is read from the upload.
MOCK_TRANSACTIONS: List[Transaction] = [
    Transaction(
        metadata="receipt-0001",
        bank_name="Chase",
        amount=42.5,
        category_id=3,
        date="2024-09-14",
        time="12:41",
        memo="Lunch with team",
    ),
    Transaction(
        metadata="receipt-0002",
        bank_name="Bank of America",
        amount=129.99,
        category_id=7,
        date="2024-09-15",
        time="18:05",
        memo=None,
    ),
    Transaction(
        metadata="receipt-0003",
        bank_name="Wells Fargo",
        amount=8.75,
        category_id=UNCATEGORIZED,
        date=None,
        time=None,
        memo=None,
    ),
]


def get_mock_transactions() -> List[Transaction]:
    return MOCK_TRANSACTIONS


def discard_upload(store: ContentStore, path: str) -> None:
    """Best-effort cleanup run after the response has been sent."""
    try:
        if store.delete(path):
            logger.info("Deleted uploaded file %s", path)
        else:
            logger.warning("Uploaded file %s was already gone", path)
    except OSError as e:
        logger.warning("Failed to delete uploaded file %s: %s", path, e)

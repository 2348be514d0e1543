"""
Receipt generator.

Renders templates/receipt.html for a transaction and stores the result on
the record as a data: URL. Regenerating overwrites the previous reference
and never touches the transaction's status or amounts.
"""
import logging
from urllib.parse import quote

from jinja2 import Environment, PackageLoader, select_autoescape

from payflow.services.settings import SettingsResolver
from payflow.services.store import TransactionStore

logger = logging.getLogger(__name__)

env = Environment(
    loader=PackageLoader("payflow", "templates"),
    autoescape=select_autoescape(["html"]),
)


class ReceiptGenerator:
    def __init__(self, store: TransactionStore, settings: SettingsResolver):
        self.store = store
        self.settings = settings

    def render(self, txn) -> str:
        template = env.get_template("receipt.html")
        return template.render(
            transaction=txn,
            company=self.settings.load().company_details,
        )

    def generate(self, transaction_id: str) -> str:
        """Raises NotFoundError if the transaction does not exist."""
        txn = self.store.require(transaction_id)
        receipt_url = "data:text/html," + quote(self.render(txn))

        txn.receipt_url = receipt_url
        self.store.update(txn)
        logger.info("Receipt generated for %s", transaction_id)
        return receipt_url

class TransactionNotFound(Exception):
    """Nenhuma transação com o id informado (vira 404 no handler da app)."""

    message = "Transaction not found"

    def __init__(self, transaction_id: int):
        super().__init__(f"{self.message}: id={transaction_id}")
        self.transaction_id = transaction_id

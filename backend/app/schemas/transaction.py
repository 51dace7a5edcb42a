from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # JSON em camelCase (paymentMethod, transactionDate...), Python em snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TransactionType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class TransactionCategory(str, Enum):
    HOUSING = "HOUSING"
    TRANSPORTATION = "TRANSPORTATION"
    FOOD = "FOOD"
    ENTERTAINMENT = "ENTERTAINMENT"
    HEALTH = "HEALTH"
    UTILITY = "UTILITY"
    SALARY = "SALARY"
    EDUCATION = "EDUCATION"
    OTHER = "OTHER"


class PaymentMethod(str, Enum):
    OTHER = "OTHER"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    BANK_SLIP = "BANK_SLIP"
    CASH = "CASH"
    PIX = "PIX"


class TransactionIn(CamelModel):
    """Payload de create e de update (update é substituição completa, não patch)."""

    title: str = Field(min_length=1, max_length=200)
    # mesmo limite da coluna Numeric(12, 2)
    amount: float = Field(gt=0, lt=10**10, allow_inf_nan=False)
    type: TransactionType
    category: TransactionCategory
    payment_method: PaymentMethod
    transaction_date: datetime

    @field_validator("title")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        # guarda o título como veio; só recusa título em branco
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    @field_validator("amount")
    @classmethod
    def _cents(cls, v: float) -> float:
        if round(v, 2) != v:
            raise ValueError("amount must have at most 2 decimal places")
        return v

    @field_validator("transaction_date", mode="before")
    @classmethod
    def _date_only(cls, v):
        # "YYYY-MM-DD" => meia-noite do dia
        if isinstance(v, str) and len(v.strip()) == 10:
            try:
                d = date.fromisoformat(v.strip())
            except ValueError:
                return v
            return datetime(d.year, d.month, d.day)
        return v

    @field_validator("transaction_date")
    @classmethod
    def _naive_utc(cls, v: datetime) -> datetime:
        # backend usa datetime naive (UTC)
        if v.tzinfo is not None:
            try:
                return v.astimezone(timezone.utc).replace(tzinfo=None)
            except OverflowError:
                raise ValueError("transactionDate out of range")
        return v


class TransactionOut(CamelModel):
    id: int
    title: str
    amount: float
    type: TransactionType
    category: TransactionCategory
    payment_method: PaymentMethod
    transaction_date: datetime


class TransactionResponse(CamelModel):
    transaction: TransactionOut


class TransactionListResponse(CamelModel):
    transactions: list[TransactionOut]


class TransactionPageResponse(CamelModel):
    transactions: list[TransactionOut]
    page: int
    limit: int
    total_pages: int


class Summary(CamelModel):
    total_credit: float = 0
    total_debit: float = 0
    net_balance: float = 0


class SummaryResponse(CamelModel):
    summary: Summary


class ErrorResponse(BaseModel):
    error: str


class ValidationIssue(BaseModel):
    field: str
    message: str
    type: str


class ValidationErrorResponse(BaseModel):
    message: str = "Validation error."
    issues: list[ValidationIssue] = Field(default_factory=list)

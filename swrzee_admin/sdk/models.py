from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for API records: camelCase on the wire, snake_case in Python, extras kept."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class FieldErrorItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    path: Any = None
    message: Optional[str] = None


class ApiEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool
    data: Any = None
    message: Optional[str] = None
    errors: Optional[List[FieldErrorItem]] = None


class TokenPair(WireModel):
    access_token: str = Field(alias="accessToken")
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")


class UserProfile(WireModel):
    id: Optional[str] = Field(default=None, alias="_id")
    user_id: Optional[str] = Field(default=None, alias="userId")
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    email: Optional[str] = None
    role: Optional[str] = None
    profile_complete: Optional[bool] = Field(default=None, alias="profileComplete")

    @property
    def is_superadmin(self) -> bool:
        return (self.role or "").lower() == UserRole.SUPERADMIN.value

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or self.email or self.user_id or "unknown"


class SessionData(BaseModel):
    user: Optional[UserProfile] = None
    tokens: Optional[TokenPair] = None

    @property
    def access_token(self) -> str | None:
        if self.tokens is None:
            return None
        return self.tokens.access_token or None


class LoginData(BaseModel):
    user: UserProfile
    tokens: TokenPair

    def to_session(self) -> SessionData:
        return SessionData(user=self.user, tokens=self.tokens)


class PaymentUser(WireModel):
    id: Optional[str] = Field(default=None, alias="_id")
    email: Optional[str] = None


class Payment(WireModel):
    id: str = Field(alias="_id")
    amount: float = 0
    status: str = ""
    payment_date: Optional[str] = Field(default=None, alias="paymentDate")
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")
    merchant_order_id: Optional[str] = Field(default=None, alias="merchantOrderId")
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")
    failure_reason: Optional[str] = Field(default=None, alias="failureReason")
    user: Optional[PaymentUser] = Field(default=None, alias="userId")


class UserStats(WireModel):
    total: int = 0


class FinancialStats(WireModel):
    total_revenue: float = Field(default=0, alias="totalRevenue")
    recent_payments: List[Payment] = Field(default_factory=list, alias="recentPayments")


class DashboardData(WireModel):
    user_stats: UserStats = Field(default_factory=UserStats, alias="userStats")
    financial_stats: FinancialStats = Field(default_factory=FinancialStats, alias="financialStats")

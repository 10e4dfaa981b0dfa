# schemas/store.py
import re
from pydantic import BaseModel
from typing import Dict

from .user import EMAIL_PATTERN


class CartItem(BaseModel):
    product_id: int


class CheckoutForm(BaseModel):
    # 형식 오류는 422 대신 필드별 메시지로 400 을 돌려주기 위해 문자열 그대로 받음
    card_number: str = ""
    expiry_date: str = ""
    cvv: str = ""
    cardholder_name: str = ""
    email: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""

    def validation_errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        card_digits = self.card_number.replace(" ", "")
        if not card_digits:
            errors["card_number"] = "Card number is required"
        elif not re.fullmatch(r"\d{16}", card_digits):
            errors["card_number"] = "Card number must be 16 digits"

        if not self.expiry_date:
            errors["expiry_date"] = "Expiry date is required"
        elif not re.fullmatch(r"(0[1-9]|1[0-2])/\d{2}", self.expiry_date):
            errors["expiry_date"] = "Invalid expiry date format (MM/YY)"

        if not self.cvv:
            errors["cvv"] = "CVV is required"
        elif not re.fullmatch(r"\d{3,}", self.cvv):
            errors["cvv"] = "CVV must be at least 3 digits"

        if not self.cardholder_name.strip():
            errors["cardholder_name"] = "Cardholder name is required"

        if not self.email:
            errors["email"] = "Email is required"
        elif not re.fullmatch(EMAIL_PATTERN, self.email):
            errors["email"] = "Invalid email format"

        for field, label in (("street", "Street address"), ("city", "City"), ("state", "State"), ("zip_code", "ZIP code")):
            if not getattr(self, field).strip():
                errors[field] = f"{label} is required"
        return errors


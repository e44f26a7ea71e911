from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional


class Transaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    metadata: str
    bank_name: str = Field(..., alias="bankName")
    type: Literal["expense"] = "expense"
    amount: float
    category_id: int = Field(..., alias="categoryId")  # -1 = uncategorized
    date: Optional[str] = None
    time: Optional[str] = None
    memo: Optional[str] = None

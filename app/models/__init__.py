from app.models.base import Base
from app.models.clause import Clause
from app.models.contract import Contract
from app.models.template import ContractTemplate

__all__ = ["Base", "ContractTemplate", "Contract", "Clause"]

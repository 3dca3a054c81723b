"""Driver class for credential records."""

from datetime import date
from typing import Optional

from .cnh import get_cnh_status
from .omnilink import get_detailed_omnilink_status
from .status_descriptor import StatusDescriptor

INDICACAO_STATUSES = ("indicado", "retificado", "nao_indicado")


class Driver:
    """A driver with the credential dates the status engine reads."""

    def __init__(
            self,
            full_name: str,
            cpf: Optional[str] = None,
            cnh: Optional[str] = None,
            cnh_expiry: Optional[str] = None,
            phone: Optional[str] = None,
            type: Optional[str] = None,
            omnilink_score_registration_date: Optional[str] = None,
            omnilink_score_expiry_date: Optional[str] = None,
            omnilink_score_status: Optional[str] = None,
            status_indicacao: Optional[str] = None,
    ):
        self.full_name = full_name
        self.cpf = cpf
        self.cnh = cnh
        self.cnh_expiry = cnh_expiry
        self.phone = phone
        self.type = type
        self.omnilink_score_registration_date = omnilink_score_registration_date
        self.omnilink_score_expiry_date = omnilink_score_expiry_date
        self.omnilink_score_status = omnilink_score_status
        self.status_indicacao = status_indicacao

    @property
    def indicacao(self) -> str:
        """Indication status, 'nao_indicado' when not recorded."""
        return self.status_indicacao or "nao_indicado"

    def cnh_status(self, today: Optional[date] = None) -> StatusDescriptor:
        return get_cnh_status(self.cnh_expiry, today)

    def omnilink_status(self, today: Optional[date] = None) -> StatusDescriptor:
        return get_detailed_omnilink_status(
            self.omnilink_score_registration_date, today
        )

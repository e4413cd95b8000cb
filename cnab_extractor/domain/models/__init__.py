"""
Modelos de dominio del proyecto cnab-extractor.

Todos los modelos son dataclasses inmutables (frozen=True) que representan
los datos del negocio sin dependencias externas.

Uso:
    from cnab_extractor.domain.models import AccountRef, BankSlipDetail, PublishOutcome
"""

from cnab_extractor.domain.models.account_ref import AccountRef
from cnab_extractor.domain.models.bank_slip import Address, BankSlipData, BankSlipDetail, Payer
from cnab_extractor.domain.models.decoded_line import DETAIL_MARKER, DecodedLine
from cnab_extractor.domain.models.file_processing_result import FileProcessingResult, MoveResult
from cnab_extractor.domain.models.invocation import InvocationContext, StorageEvent
from cnab_extractor.domain.models.publish_outcome import PipelineState, PublishOutcome
from cnab_extractor.domain.models.retry_policy import (
    DEFAULT_RETRY_POLICY,
    RetryPolicy,
    StatusCode,
)

__all__ = [
    "DEFAULT_RETRY_POLICY",
    "DETAIL_MARKER",
    "AccountRef",
    "Address",
    "BankSlipData",
    "BankSlipDetail",
    "DecodedLine",
    "FileProcessingResult",
    "InvocationContext",
    "MoveResult",
    "Payer",
    "PipelineState",
    "PublishOutcome",
    "RetryPolicy",
    "StatusCode",
    "StorageEvent",
]

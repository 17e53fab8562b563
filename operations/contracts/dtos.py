from dataclasses import dataclass
from datetime import date


@dataclass
class ContractRenewalDTO:
    """DTO for renewing a contract"""
    contract_number: str
    valid_from: date
    valid_to: date
    contract_copy_url: str = ''
    copy_terms: bool = True

"""
Partners domain package.

Public API:
- Domain models: Partner, PartnerType, PartnerStatus
- Directory: InMemoryPartnerDirectory (claimable partner state)
- Loaders: partners_from_frame, load_partners_csv
- estimate_earnings
"""
from .models import Partner, PartnerType, PartnerStatus
from .directory import InMemoryPartnerDirectory
from .loader import partners_from_frame, load_partners_csv
from .earnings import estimate_earnings

__all__ = ["Partner",
           "PartnerType",
             "PartnerStatus",
               "InMemoryPartnerDirectory",
               "partners_from_frame",
               "load_partners_csv",
               "estimate_earnings",
               ]

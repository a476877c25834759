"""Application service layer for ISS Flyover.

Domain-oriented submodules:
    flyover_service: public IP -> coordinates -> ISS pass times pipeline

"""

from .flyover_service import FlyoverService, next_iss_times_for_my_location

__all__ = [
    "FlyoverService",
    "next_iss_times_for_my_location",
]

# Database models
from app.models.account import Account
from app.models.property import Property
from app.models.enquiry import Enquiry
from app.models.page import Page

__all__ = [
    "Account",
    "Property",
    "Enquiry",
    "Page",
]

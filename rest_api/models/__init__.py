"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class, EntityMixin, ModeratedMixin, ContactMixin
- listing: Listing, TrainerListing
- event: Event
- job: Job, SeekingEmployment
- content: Blog, MemberVideo
- education: Education, EducationCategory
- store: Product, Coupon, ShippingZone, ShippingMethod
- membership: MembershipPlan
- user: User
- category: Category
- email_template: EmailTemplate
- history: VersionHistory
- recycle_bin: RecycleBinItem
"""

# Base classes
from .base import Base, EntityMixin, ModeratedMixin, ContactMixin

# Directory listings
from .listing import Listing, TrainerListing
from .event import Event
from .job import Job, SeekingEmployment

# Editorial content
from .content import Blog, MemberVideo
from .education import Education, EducationCategory

# Store
from .store import Product, Coupon, ShippingZone, ShippingMethod
from .membership import MembershipPlan

# Accounts and taxonomy
from .user import User
from .category import Category
from .email_template import EmailTemplate

# Lifecycle bookkeeping
from .history import VersionHistory
from .recycle_bin import RecycleBinItem


__all__ = [
    # Base
    "Base",
    "EntityMixin",
    "ModeratedMixin",
    "ContactMixin",
    # Listings
    "Listing",
    "TrainerListing",
    "Event",
    "Job",
    "SeekingEmployment",
    # Content
    "Blog",
    "MemberVideo",
    "Education",
    "EducationCategory",
    # Store
    "Product",
    "Coupon",
    "ShippingZone",
    "ShippingMethod",
    "MembershipPlan",
    # Accounts and taxonomy
    "User",
    "Category",
    "EmailTemplate",
    # Lifecycle
    "VersionHistory",
    "RecycleBinItem",
]

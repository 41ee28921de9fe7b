from enum import Enum


class SaleChannel(str, Enum):
    MANUAL = "manual"
    RETAIL = "retail"
    CSV_IMPORT = "csv_import"
    ETSY = "etsy"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

from .form import MarForm
from .line_item import LineItem
from .administration import AdministrationMark
from .prn_record import PRNRecord
from .vital_signs import VitalSignsReading
from .custom_legend import CustomLegend
from . import choices

__all__ = [
    "MarForm",
    "LineItem",
    "AdministrationMark",
    "PRNRecord",
    "VitalSignsReading",
    "CustomLegend",
    "choices",
]

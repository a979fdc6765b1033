from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
import pandas as pd
import logging

from utils.data.validation import REQUIRED_DAILY_COLUMNS, validate_daily_records

logger = logging.getLogger(__name__)


class BaseDataLoader(ABC):
    """Abstract base class for all data loaders."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config or {}
        self.data: Optional[pd.DataFrame] = None
        self.validation_report: Dict[str, Any] = {}

    @abstractmethod
    def load_data(self, file_path: str, **kwargs) -> pd.DataFrame:
        """Load data from file and return standardized DataFrame."""
        pass

    @abstractmethod
    def get_required_columns(self) -> List[str]:
        """Return list of required columns for this data type."""
        pass

    def validate_data(self, data: pd.DataFrame) -> bool:
        """Validate loaded data structure and content."""
        return True

    def preprocess_data(self, data: pd.DataFrame) -> pd.DataFrame:
        """Apply common preprocessing steps."""
        return data

    def has_data(self) -> bool:
        """Check if data has been loaded."""
        return self.data is not None and not self.data.empty


class StationDataLoader(BaseDataLoader):
    """Base class for single-station daily climate loaders."""

    def get_required_columns(self) -> List[str]:
        """Return required daily columns."""
        return list(REQUIRED_DAILY_COLUMNS)

    def validate_data(self, data: pd.DataFrame) -> bool:
        """Validate daily structure; raises DataQualityError on structural defects.

        Returns False when values fall outside plausible physical ranges.
        """
        temperature_range = self.config.get('validation', {}).get('temperature_range_f', (-50.0, 110.0))
        self.validation_report = validate_daily_records(data, temperature_range=temperature_range)

        if not self.validation_report['valid']:
            logger.warning("Daily records contain implausible values; they are kept for analysis")

        return self.validation_report['valid']

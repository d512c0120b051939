"""
Additional Data Template Module.

The job-order API requires a static block of additional data with every
submission. The only per-submission change is a suffix on the object name
of each declaration entry. The template is held privately and every
accessor hands out a deep copy, so submissions never share state.
"""

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from config import get_config
from relayhub_uploader.utils.logger import get_logger
from relayhub_uploader.utils.exceptions import PayloadError

logger = get_logger(__name__)


class AdditionalDataTemplate:
    """
    Immutable additional data template.
    
    Example:
        >>> template = AdditionalDataTemplate(
        ...     {"declaration": [{"objectIdentification": {"objectName": "EXP-"}}]}
        ... )
        >>> data = template.with_object_suffix("0080")
        >>> data["declaration"][0]["objectIdentification"]["objectName"]
        'EXP-0080'
    """
    
    def __init__(self, data: Dict[str, Any]) -> None:
        """
        Args:
            data: Template mapping. It is copied; later changes to the
                  caller's object do not affect the template.
                  
        Raises:
            PayloadError: If the declaration list is malformed.
        """
        self._validate(data, "<mapping>")
        self._data = deepcopy(data)
    
    @staticmethod
    def _validate(data: Any, source: str) -> None:
        if not isinstance(data, dict):
            raise PayloadError(source, "template must be a mapping")
        
        declarations = data.get("declaration", [])
        if not isinstance(declarations, list):
            raise PayloadError(source, "'declaration' must be a list")
        
        for index, entry in enumerate(declarations):
            identification = entry.get("objectIdentification") if isinstance(entry, dict) else None
            if not isinstance(identification, dict) or "objectName" not in identification:
                raise PayloadError(
                    source,
                    f"declaration[{index}] has no objectIdentification.objectName"
                )
        
        # Sent as the request body, so it must be plain JSON
        try:
            json.dumps(data)
        except (TypeError, ValueError) as e:
            raise PayloadError(source, f"not JSON serializable: {e}") from e
    
    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'AdditionalDataTemplate':
        """
        Load a template from a YAML (or JSON) file.
        
        Raises:
            PayloadError: If the file is missing, unparsable or malformed.
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise PayloadError(str(path), str(e)) from e
        except yaml.YAMLError as e:
            raise PayloadError(str(path), f"invalid YAML: {e}") from e
        
        cls._validate(data, str(path))
        logger.debug(f"Additional data template loaded from {path}")
        return cls(data)
    
    @classmethod
    def from_config(cls, path: Optional[Union[str, Path]] = None) -> 'AdditionalDataTemplate':
        """Load the template configured under paths.additional_data_template."""
        path = path or get_config("paths.additional_data_template")
        if not path:
            raise PayloadError("paths.additional_data_template", "not configured")
        return cls.from_file(path)
    
    @property
    def data(self) -> Dict[str, Any]:
        """Deep copy of the template."""
        return deepcopy(self._data)
    
    @property
    def declaration_count(self) -> int:
        return len(self._data.get("declaration", []))
    
    def with_object_suffix(self, suffix: str) -> Dict[str, Any]:
        """
        Return a copy with suffix appended to every declaration objectName.
        
        The suffix is appended as-is, without a separator.
        
        Args:
            suffix: Allocated object ID.
            
        Returns:
            New additional data mapping.
        """
        data = deepcopy(self._data)
        for declaration in data.get("declaration", []):
            identification = declaration["objectIdentification"]
            identification["objectName"] = f"{identification['objectName']}{suffix}"
        return data

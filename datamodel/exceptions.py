"""
Custom exception classes for the schema-driven data model.

The core engine degrades instead of raising; these exceptions are used by the
strict entry points (draft operations, strict schema/config loading) and carry
context plus recovery suggestions for the caller to surface.
"""

import logging
from typing import Optional, Dict, Any, List
from pathlib import Path

logger = logging.getLogger(__name__)


class DataModelError(Exception):
    """
    Base exception for data model errors.
    
    Attributes:
        message: Error message
        context: Additional context information
        recovery_suggestions: List of suggested recovery actions
    """
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None, 
                 recovery_suggestions: Optional[List[str]] = None):
        self.message = message
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        super().__init__(self.message)
    
    def __str__(self) -> str:
        return self.message
    
    def get_full_details(self) -> Dict[str, Any]:
        """Get complete error details including context and suggestions."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'context': self.context,
            'recovery_suggestions': self.recovery_suggestions
        }


class ConfigurationLoadError(DataModelError):
    """
    Exception raised when configuration file loading fails.
    
    This includes YAML parsing errors, file not found, permission issues, etc.
    """
    
    def __init__(self, config_path: Path, original_error: Exception, 
                 message: Optional[str] = None):
        self.config_path = config_path
        self.original_error = original_error
        
        if message is None:
            message = f"Failed to load configuration from {config_path}: {str(original_error)}"
        
        context = {
            'config_path': str(config_path),
            'original_error_type': type(original_error).__name__,
            'original_error_message': str(original_error)
        }
        
        recovery_suggestions = [
            "Check if config.yaml exists and is readable",
            "Verify YAML syntax is correct",
            "Omit the file to run with the default configuration"
        ]
        
        super().__init__(message, context, recovery_suggestions)


class SchemaLoadError(DataModelError):
    """
    Exception raised when a schema file cannot be loaded or is structurally invalid.
    """
    
    def __init__(self, schema_path: Path, reason: str, message: Optional[str] = None):
        self.schema_path = schema_path
        self.reason = reason
        
        if message is None:
            message = f"Failed to load schema {schema_path}: {reason}"
        
        context = {
            'schema_path': str(schema_path),
            'reason': reason,
            'path_exists': schema_path.exists()
        }
        
        recovery_suggestions = [
            f"Check that the schema file exists: {schema_path}",
            "Use a .yaml, .yml or .json file",
            "Make sure every node has a supported 'type' and dict-valued 'properties'/'items'"
        ]
        
        super().__init__(message, context, recovery_suggestions)


class SchemaPathError(DataModelError):
    """
    Exception raised when a data path does not address the kind of schema node an
    operation needs (e.g. adding an array item at a path that is not an array).
    """
    
    def __init__(self, path: str, expected_kind: str, actual_kind: Optional[str] = None,
                 message: Optional[str] = None):
        self.path = path
        self.expected_kind = expected_kind
        self.actual_kind = actual_kind
        
        if message is None:
            found = actual_kind if actual_kind else "nothing"
            message = f"Path '{path}' addresses {found} in the schema, expected {expected_kind}"
        
        context = {
            'path': path,
            'expected_kind': expected_kind,
            'actual_kind': actual_kind
        }
        
        recovery_suggestions = [
            "Check the path against the field list of the schema",
            "Use bracketed indices for array items, e.g. positions[0].qty"
        ]
        
        super().__init__(message, context, recovery_suggestions)


def log_error_with_context(error: DataModelError, operation: str) -> None:
    """
    Log error with full context information.
    
    Args:
        error: DataModelError instance
        operation: Description of the operation that failed
    """
    logger.error(f"Data model error during {operation}")
    logger.error(f"Error type: {type(error).__name__}")
    logger.error(f"Error message: {error.message}")
    
    if error.context:
        logger.error("Error context:")
        for key, value in error.context.items():
            logger.error(f"  {key}: {value}")
    
    if error.recovery_suggestions:
        logger.info("Recovery suggestions:")
        for i, suggestion in enumerate(error.recovery_suggestions, 1):
            logger.info(f"  {i}. {suggestion}")

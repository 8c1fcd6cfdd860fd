"""
Domain Exceptions.

Custom exceptions for domain-level errors.
These exceptions represent catalog rule violations raised by admin mutations
and storage operations. The configurator core never raises them.
"""

from typing import Optional, Any, Dict, List


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "DOMAIN_ERROR"
        self.details = details or {}


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            message=f"{entity_type} with id '{entity_id}' not found",
            code="ENTITY_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": str(entity_id)}
        )


class EntityAlreadyExistsException(DomainException):
    """Raised when trying to create an entity that already exists."""

    def __init__(self, entity_type: str, identifier: Any):
        super().__init__(
            message=f"{entity_type} with identifier '{identifier}' already exists",
            code="ENTITY_ALREADY_EXISTS",
            details={"entity_type": entity_type, "identifier": str(identifier)}
        )


class ValidationException(DomainException):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, "value": str(value) if value is not None else None}
        )


class BusinessRuleViolationException(DomainException):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code="BUSINESS_RULE_VIOLATION",
            details={"rule": rule, **(details or {})}
        )


class IncompatibleLicenseException(DomainException):
    """Raised when a license is bound to a model outside its compatibility list."""

    def __init__(self, sku: str, model_id: str, compatible_model_names: List[str]):
        super().__init__(
            message=f"License {sku} is only compatible with: "
                    f"{', '.join(compatible_model_names)}",
            code="INCOMPATIBLE_LICENSE",
            details={
                "sku": sku,
                "model_id": model_id,
                "compatible_models": list(compatible_model_names),
            }
        )


class CatalogStorageException(DomainException):
    """Raised when the catalog document cannot be imported or restored."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            message=f"Failed to {operation}: {reason}",
            code="CATALOG_STORAGE_ERROR",
            details={"operation": operation, "reason": reason}
        )

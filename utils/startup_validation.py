"""
Startup Validation Module

Checks configuration before the application starts serving:
1. Required settings are present and not left at development defaults
2. Token settings are usable
3. The database answers a trivial query

Results are collected in a StartupReport and logged; in production any
failed error-severity check aborts startup.
"""

import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

DEVELOPMENT_SECRETS = {"dev-session-secret-change-me"}


@dataclass
class ValidationResult:
    """Result of a validation check."""
    name: str
    passed: bool
    message: str
    severity: str = "error"  # error, warning, info
    remediation: Optional[str] = None


@dataclass
class StartupReport:
    timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat())
    environment: str = "unknown"
    validations: List[ValidationResult] = field(default_factory=list)

    def add_validation(self, result: ValidationResult):
        self.validations.append(result)

    def has_critical_failures(self) -> bool:
        return any(v.severity == "error" and not v.passed for v in self.validations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "environment": self.environment,
            "validations": [
                {
                    "name": v.name,
                    "passed": v.passed,
                    "message": v.message,
                    "severity": v.severity,
                    "remediation": v.remediation
                }
                for v in self.validations
            ],
            "summary": {
                "total_validations": len(self.validations),
                "passed": sum(1 for v in self.validations if v.passed),
                "failed": sum(1 for v in self.validations if not v.passed),
            }
        }


class StartupValidator:
    """Validates a Flask app's configuration and database connectivity."""

    def __init__(self, app):
        self.app = app
        self.report = StartupReport(environment=app.config.get("ENVIRONMENT", "unknown"))

    @property
    def is_production(self) -> bool:
        return self.report.environment == "production"

    def validate_secrets(self):
        config = self.app.config
        for key, description in (
            ("SECRET_KEY", "Session encryption key (SESSION_SECRET)"),
            ("JWT_SECRET", "Access token signing key"),
        ):
            value = config.get(key)
            if not value:
                self.report.add_validation(ValidationResult(
                    name=key, passed=False, message=f"{description} is not set",
                    remediation=f"Set {key} in the environment",
                ))
            elif value in DEVELOPMENT_SECRETS:
                self.report.add_validation(ValidationResult(
                    name=key, passed=False, message=f"{description} uses the development default",
                    severity="error" if self.is_production else "warning",
                    remediation="Set a random secret of at least 32 characters",
                ))
            else:
                self.report.add_validation(ValidationResult(name=key, passed=True, message="configured"))

    def validate_token_settings(self):
        expires_in = self.app.config.get("JWT_EXPIRES_IN")
        if not isinstance(expires_in, int) or expires_in <= 0:
            self.report.add_validation(ValidationResult(
                name="JWT_EXPIRES_IN", passed=False,
                message=f"Token lifetime must be a positive number of seconds, got {expires_in!r}",
            ))
        else:
            self.report.add_validation(ValidationResult(
                name="JWT_EXPIRES_IN", passed=True, message=f"{expires_in}s",
            ))

    def validate_database(self):
        from models import db

        try:
            with self.app.app_context():
                db.session.execute(text("SELECT 1"))
                db.session.rollback()
            self.report.add_validation(ValidationResult(name="database", passed=True, message="reachable"))
        except SQLAlchemyError as e:
            self.report.add_validation(ValidationResult(
                name="database", passed=False, message=f"Database check failed: {str(e)[:100]}",
                remediation="Verify DATABASE_URL",
            ))

    def run_all(self) -> StartupReport:
        self.validate_secrets()
        self.validate_token_settings()
        self.validate_database()

        for result in self.report.validations:
            if result.passed:
                logger.debug(f"Startup check {result.name}: {result.message}")
            elif result.severity == "error":
                logger.error(f"Startup check {result.name} failed: {result.message}")
            else:
                logger.warning(f"Startup check {result.name}: {result.message}")

        return self.report


def validate_startup(app) -> StartupReport:
    """
    Run every check and log the report.

    Raises:
        RuntimeError: production environment with a failed error-severity check
    """
    report = StartupValidator(app).run_all()
    if report.has_critical_failures() and report.environment == "production":
        raise RuntimeError("Startup validation failed; refusing to start in production")
    return report

"""Run settings - defaults, overridden by a YAML file, overridden by the environment."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field

from booking_flow.engine.schema import ClientContactData

DEFAULT_CONFIG_FILE = 'booking-flow.yaml'

# Environment variable -> settings field
ENV_VARS = {
    'BASE_URL': 'base_url',
    'TEST_SUBDOMINIO': 'subdomain',
    'TEST_CLIENTE_TELEFONE': 'client_phone',
    'TEST_CLIENTE_NOME': 'client_name',
    'TEST_CLIENTE_EMAIL': 'client_email',
    'BOOKING_FLOW_VISIBILITY_TIMEOUT_MS': 'visibility_timeout_ms',
    'BOOKING_FLOW_SLOT_TIMEOUT_MS': 'slot_timeout_ms',
    'BOOKING_FLOW_ACTION_TIMEOUT_MS': 'action_timeout_ms',
    'BOOKING_FLOW_NAVIGATION_TIMEOUT_MS': 'navigation_timeout_ms',
    'BOOKING_FLOW_SETTLE_SCALE': 'settle_scale',
    'BOOKING_FLOW_TERMINAL_KEYWORD': 'terminal_keyword',
    'BOOKING_FLOW_LOG_LEVEL': 'log_level',
}


def _is_truthy(value: str) -> bool:
    return value.lower().strip() in ('y', 'yes', 'true', '1')


class BookingSettings(BaseModel):
    """Environment-provided parameters for a booking flow run."""

    base_url: str = Field('http://localhost:5173', description="Root URL of the booking app")
    subdomain: str = Field('demo', description="Partner subdomain / tenant")
    client_phone: str = Field('11999999999', description="Default client phone")
    client_name: str = Field('João da Silva Teste', description="Default client name")
    client_email: Optional[str] = Field('joao.teste@example.com', description="Default client e-mail")
    visibility_timeout_ms: int = Field(10000, gt=0)
    slot_timeout_ms: int = Field(10000, gt=0)
    action_timeout_ms: int = Field(15000, gt=0)
    navigation_timeout_ms: int = Field(30000, gt=0)
    settle_scale: float = Field(1.0, ge=0)
    terminal_keyword: str = 'Confirmar'
    headless: bool = True
    verbose: bool = False
    log_level: str = 'INFO'

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None,
             environ: Optional[Mapping[str, str]] = None) -> 'BookingSettings':
        """Build settings from defaults, a YAML file and the environment.

        Args:
            path: YAML file; defaults to booking-flow.yaml in the working
                directory when it exists
            environ: Environment mapping (default: os.environ)

        Raises:
            FileNotFoundError: If an explicit path does not exist
            ValidationError: If a value has the wrong type
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        if path is not None:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
        else:
            config_path = Path.cwd() / DEFAULT_CONFIG_FILE

        if config_path.exists():
            with open(config_path, 'r') as f:
                values.update(yaml.safe_load(f) or {})

        for env_name, field_name in ENV_VARS.items():
            if env_name in environ:
                values[field_name] = environ[env_name]

        if 'BOOKING_FLOW_HEADED' in environ:
            values['headless'] = not _is_truthy(environ['BOOKING_FLOW_HEADED'])
        if 'BOOKING_FLOW_VERBOSE' in environ:
            values['verbose'] = _is_truthy(environ['BOOKING_FLOW_VERBOSE'])

        return cls(**values)

    def with_overrides(self, **overrides: Any) -> 'BookingSettings':
        """Copy with the given fields replaced; None values are ignored."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return self.model_validate({**self.model_dump(), **changes})

    def default_client(self) -> ClientContactData:
        return ClientContactData(
            phone=self.client_phone,
            name=self.client_name,
            email=self.client_email,
        )

"""FlowLoader - loads and validates YAML flow definitions."""

import yaml
from pathlib import Path
from typing import List, Optional
from .schema import BookingFlow


class FlowLoader:
    """
    Loads booking flows from YAML files.

    Validates structure using Pydantic models.
    """

    def __init__(self, base_path: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            base_path: Directory holding a flows/ folder (default: the
                booking_flow package directory)
        """
        if base_path is None:
            base_path = Path(__file__).resolve().parent.parent
        self.base_path = Path(base_path)

    @property
    def flows_dir(self) -> Path:
        return self.base_path / "flows"

    def load_flow(self, flow_name: str) -> BookingFlow:
        """
        Load a flow definition from YAML.

        Args:
            flow_name: Name of flow (e.g., 'booking')

        Returns:
            Validated BookingFlow instance

        Raises:
            FileNotFoundError: If flow file doesn't exist
            ValidationError: If YAML doesn't match schema
        """
        flow_path = self.flows_dir / f"{flow_name}.yaml"

        if not flow_path.exists():
            raise FileNotFoundError(f"Flow not found: {flow_path}")

        with open(flow_path, 'r') as f:
            data = yaml.safe_load(f)

        return BookingFlow(**data)

    def list_flows(self) -> List[str]:
        if not self.flows_dir.exists():
            return []
        return sorted(path.stem for path in self.flows_dir.glob("*.yaml"))

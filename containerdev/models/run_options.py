"""Run options model."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class RunOptions:
    """Fully derived parameters for a single container run."""

    image: str
    name: Optional[str] = None
    stdin: bool = False
    tty: bool = False
    as_user: bool = False
    # host path -> container path, flags are emitted in insertion order
    volumes: Dict[str, str] = field(default_factory=dict)
    work_dir: Optional[str] = None
    entrypoint: Optional[str] = None
    cmd: Optional[List[str]] = None

"""Shared type definitions for pipebus."""

from collections.abc import Callable
from typing import Any

# Subscriber callback; return value is ignored by the bus
type Callback = Callable[..., Any]

# Key grouping callbacks inside a ChangeRegistry (compared case-insensitively)
type ChangeType = str

# Topic within a pipe
type Address = str

# Name of a pipe within a PipeRegistry (compared case-sensitively)
type PipeName = str

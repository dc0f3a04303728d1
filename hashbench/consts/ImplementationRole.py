from enum import Enum


class ImplementationRole(Enum):
    REFERENCE = "reference"
    CANDIDATE = "candidate"

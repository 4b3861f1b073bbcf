from .node import Node
from .factory import is_type, make_empty_cell, make_empty_row
from .edits import (
    ChangeLog,
    EditError,
    EditOp,
    Emitter,
    InsertChild,
    RemoveChild,
    SetNodeData,
    apply_edits,
)

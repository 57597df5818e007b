"""pubtree — CLI kompilatora publikacji (pubtree <komenda>)."""

__version__ = "0.1.0"

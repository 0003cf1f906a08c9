from .registry import (
    BUNDLED_TCA_DIR,
    DEMO_RECORD_FIELD,
    ColumnConfig,
    FieldConfig,
    SchemaRegistry,
    TableConfig,
)

__all__ = [
    "BUNDLED_TCA_DIR",
    "DEMO_RECORD_FIELD",
    "ColumnConfig",
    "FieldConfig",
    "SchemaRegistry",
    "TableConfig",
]

from archexport.ir.model import Layer
from archexport.migration.classifier import MigrationStatus

# Swimlane and node colors for the as-is / target pages
LAYER_STYLE = {
    Layer.BUSINESS: {
        "fill": "#fff2cc",
        "stroke": "#d6b656",
    },
    Layer.APPLICATION: {
        "fill": "#dae8fc",
        "stroke": "#6c8ebf",
    },
    Layer.TECHNOLOGY: {
        "fill": "#d5e8d4",
        "stroke": "#82b366",
    },
    Layer.MOTIVATION: {
        "fill": "#e1d5e7",
        "stroke": "#9673a6",
    },
    Layer.STRATEGY: {
        "fill": "#f8cecc",
        "stroke": "#b85450",
    },
    Layer.IMPLEMENTATION: {
        "fill": "#fff2cc",
        "stroke": "#d6b656",
    },
}

DEFAULT_LAYER_STYLE = {
    "fill": "#f5f5f5",
    "stroke": "#666666",
}

# Migration page overlay
MIGRATION_STYLE = {
    MigrationStatus.KEEP: {
        "fill": "#dae8fc",
        "stroke": "#6c8ebf",
        "font": "#333333",
        "suffix": "",
        "legend": "KEEP (unchanged)",
    },
    MigrationStatus.ADD: {
        "fill": "#d5e8d4",
        "stroke": "#82b366",
        "font": "#333333",
        "suffix": " [NEW]",
        "legend": "ADD (new)",
    },
    MigrationStatus.REMOVE: {
        "fill": "#f8cecc",
        "stroke": "#b85450",
        "font": "#333333",
        "suffix": " [REMOVE]",
        "legend": "REMOVE (retire)",
    },
}

FONT_COLOR = "#333333"
EDGE_COLOR = "#666666"
REMOVED_EDGE_DASH = "dashed=1;dashPattern=8 4;"


def layer_style(layer: Layer) -> dict:
    return LAYER_STYLE.get(layer, DEFAULT_LAYER_STYLE)

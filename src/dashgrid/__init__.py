"""dashgrid: collision-free layout engine for draggable, resizable grid dashboards."""

__version__ = "0.1.0"

"""
Layout core of the timeline viewer: granularities, calendar stepping, grid
generation, scale transitions, date-to-pixel mapping and lane packing.

Modules are imported directly (``from timeline_viewer.rendering.grid_builder
import GridBuilder``); the configuration module depends on ``granularity``,
so nothing is re-exported here.
"""

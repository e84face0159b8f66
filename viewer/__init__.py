"""
Unity Archive Viewer -- PySide6 Desktop Application.

Package layout:
    panels/     Section pages (home, grids, timeline, mind map, detail)
    widgets/    Reusable custom widgets (notes box, toast, overlay)
    services/   Application services (event bus, loader, note backend)
    theme/      Theme and custom stylesheets
"""

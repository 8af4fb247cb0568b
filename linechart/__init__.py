from linechart.config import ChartConfig, ChartLayout, ChartStyle, Margins, load_config
from linechart.engine import ChartGeometryEngine
from linechart.errors import ChartDataError, NoValidDataError, SeriesShapeError
from linechart.gallery import GalleryResult, render_gallery
from linechart.geometry import PathSegment, SubSeriesPath
from linechart.palette import Palette
from linechart.plan import AxisTick, RenderPlan
from linechart.scales import Domain, LinearScale
from linechart.series import ScalarShape, Series, SeriesData, VectorShape
from linechart.surface import RasterSurface, Surface, SvgSurface, redraw

__all__ = [
    "AxisTick",
    "ChartConfig",
    "ChartDataError",
    "ChartGeometryEngine",
    "ChartLayout",
    "ChartStyle",
    "Domain",
    "GalleryResult",
    "LinearScale",
    "Margins",
    "NoValidDataError",
    "Palette",
    "PathSegment",
    "RasterSurface",
    "RenderPlan",
    "ScalarShape",
    "Series",
    "SeriesData",
    "SeriesShapeError",
    "SubSeriesPath",
    "Surface",
    "SvgSurface",
    "VectorShape",
    "load_config",
    "redraw",
    "render_gallery",
]

"""Input/Output operations for alignment files, DXF and debug exports."""

from .alignment_reader import build_curve, build_segment, load_alignment
from .dxf_writer import DXFWriter, export_curve_to_dxf
from .wavefront_writer import WavefrontWriter

__all__ = [
    "build_curve",
    "build_segment",
    "load_alignment",
    "DXFWriter",
    "export_curve_to_dxf",
    "WavefrontWriter",
]

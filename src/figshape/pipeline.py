"""
Main pipeline orchestrator for figshape.

Loads each input image, isolates its figures by color, classifies every
figure and writes the report.
"""

import json
from dataclasses import replace
from datetime import datetime

from figshape.classify.shape_classifier import analyze_figures
from figshape.config import load_config
from figshape.export.report import generate_report
from figshape.io.load_image import load_image, validate_image_inputs
from figshape.io.save_artifacts import DebugArtifactWriter, draw_ray_overlay, ensure_dir
from figshape.isolate.color_filter import background_color, isolate_figures
from figshape.models import ClassificationReport, ImageReport, generate_image_id, generate_report_id
from figshape.signal.ray_cast import ray_endpoints
from figshape.tracer import get_tracer, trace


@trace(label="run_pipeline")
def run_pipeline(input_paths, out_dir, config=None, config_path=None, debug=False):
    """
    Classify every figure of every input image.

    Args:
        input_paths: list of input image file paths
        out_dir: output directory
        config: PipelineConfig object (optional)
        config_path: path to YAML config file (optional)
        debug: enable debug artifact generation

    Returns:
        ClassificationReport with one ImageReport per input
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)

    if debug and not config.debug.enabled:
        config = replace(config, debug=replace(config.debug, enabled=True))

    errors = validate_image_inputs(input_paths)
    if errors:
        for error in errors:
            tracer.event(error, level="ERROR")
        raise ValueError(f"Input validation failed: {errors}")

    ensure_dir(out_dir)

    report = ClassificationReport(
        report_id=generate_report_id(input_paths),
        created_at=datetime.now().isoformat(),
    )

    for idx, input_path in enumerate(input_paths):
        with tracer.span(f"process_image_{idx}", module="pipeline"):
            rgb_img, _ = load_image(input_path)
            image_id = generate_image_id(input_path, idx)

            debug_writer = DebugArtifactWriter(
                out_dir, image_id,
                enabled=True,
                max_edge=config.debug.max_edge_scale,
            ) if config.debug.enabled else None

            image_report = classify_image(
                rgb_img, config,
                image_id=image_id,
                source_path=input_path,
                debug_writer=debug_writer,
            )
            report.images.append(image_report)

    generate_report(report, out_dir)

    tracer.event(f"Pipeline complete: {len(report.images)} images, {len(report.results)} figures")

    return report


def classify_image(rgb_img, config, image_id="image", source_path="", debug_writer=None):
    """
    Isolate and classify all figures of one in-memory image.

    Returns an ImageReport.
    """
    tracer = get_tracer()

    with tracer.span("isolate", module="pipeline"):
        figures = isolate_figures(rgb_img)

    with tracer.span("classify", module="pipeline"):
        analyses = analyze_figures(figures, config)

    results = [result for result, _ in analyses]

    if debug_writer:
        with tracer.span("debug_artifacts", module="pipeline"):
            save_figure_artifacts(figures, analyses, config, debug_writer)

    height, width = rgb_img.shape[:2]
    return ImageReport(
        image_id=image_id,
        source_path=source_path,
        width=width,
        height=height,
        background=list(background_color(rgb_img)),
        results=results,
    )


def save_figure_artifacts(figures, analyses, config, debug_writer):
    """
    Write mask, ray overlay and signals for each analyzed figure.

    analyses are the (result, signal) pairs from analyze_figures, so nothing
    is recomputed here. Failed figures only get their mask and result.
    """
    for figure, (result, signal) in zip(figures, analyses):
        debug_writer.save_image(figure.mask, figure.figure_id, "00_mask.png")
        debug_writer.save_json(result, figure.figure_id, "result.json")

        if signal is None:
            continue

        endpoints = ray_endpoints(
            signal.centroid, signal.raw,
            start_angle=config.ray.start_angle,
            magnitude=config.ray.ray_magnitude,
            stride=max(1, config.debug.ray_stride),
        )
        overlay = draw_ray_overlay(figure.mask, signal.centroid, endpoints)
        debug_writer.save_image(overlay, figure.figure_id, "01_rays_overlay.png")
        debug_writer.save_signal(figure.figure_id, signal.raw, signal.smoothed, signal.window)


def load_report(path):
    """Load a previously written classification_report.json."""
    with open(path, "r", encoding="utf-8") as f:
        return ClassificationReport.model_validate(json.load(f))

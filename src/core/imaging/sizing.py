"""Bounding-box scaling."""


def scale_to_fit(
    source_width: int,
    source_height: int,
    box_width: int,
    box_height: int,
) -> tuple[int, int]:
    """Scale dimensions uniformly so they fit inside a bounding box.

    The factor is ``min(box_width / source_width, box_height / source_height)``,
    so one side touches the box and the aspect ratio is kept. Sources smaller
    than the box are scaled up. Each side is rounded and never drops below 1.

    Raises:
        ValueError: If any dimension is not positive
    """
    if min(source_width, source_height, box_width, box_height) <= 0:
        raise ValueError(
            "Dimensions must be positive: "
            f"source={source_width}x{source_height} box={box_width}x{box_height}"
        )

    factor = min(box_width / source_width, box_height / source_height)

    out_width = max(1, round(factor * source_width))
    out_height = max(1, round(factor * source_height))

    return out_width, out_height

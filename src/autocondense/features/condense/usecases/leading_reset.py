"""
Summary: Force every paragraph's first character back to full scale, once per flow.
Why: Undo earlier leading-character exemptions across a whole linked chain.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence

from autocondense.features.condense.domain import FULL_SCALE, TextUnit

from .events import CondenseEvent, log_condense
from .ports import FlowScalePort, ProgressCallback


def reset_leading_characters(
    port: FlowScalePort,
    containers: Sequence[TextUnit],
    *,
    progress_callback: ProgressCallback | None = None,
) -> int:
    """Set the first character of every paragraph in each selected flow to 100%.

    Containers sharing one flow are processed once. Empty paragraphs are left
    alone and not counted. Each flow is recomposed once after all of its
    paragraphs were reset.

    Returns:
        int: Number of paragraphs whose first character was reset.
    """

    seen_flows: set[Hashable] = set()
    total_reset = 0
    total_containers = len(containers)

    for index, container in enumerate(containers, start=1):
        if progress_callback is not None:
            progress_callback(index, total_containers)

        flow_id = port.linked_chain_identity(container)
        if flow_id in seen_flows:
            continue
        seen_flows.add(flow_id)

        flow_reset = 0
        snapshot = port.capture_scales(container)
        try:
            for paragraph_index, leading in enumerate(port.leading_scales(container)):
                if leading is None:
                    continue
                port.set_leading_scale(container, paragraph_index, FULL_SCALE)
                flow_reset += 1
        except Exception as exc:
            # A flow is reset completely or not at all.
            port.restore_scales(container, snapshot)
            flow_reset = 0
            error_message = str(exc) if str(exc) else type(exc).__name__
            log_condense(
                logging.ERROR,
                CondenseEvent.UNIT_ERROR,
                "Error resetting leading characters [unit=%s, error=%s]",
                container,
                error_message,
                unit=container,
                error_message=error_message,
            )
        port.reflow(container)
        total_reset += flow_reset
        log_condense(
            logging.DEBUG,
            CondenseEvent.RESET_FLOW,
            "Reset %d paragraph(s) in flow of %s",
            flow_reset,
            container,
            unit=container,
            paragraphs=flow_reset,
        )

    log_condense(
        logging.INFO,
        CondenseEvent.RESET_COMPLETE,
        "Leading characters reset [flows=%d, paragraphs=%d]",
        len(seen_flows),
        total_reset,
        flows=len(seen_flows),
        paragraphs=total_reset,
    )
    return total_reset


__all__ = ["reset_leading_characters"]

#!/usr/bin/env python3
"""
DAG Exporter - Common module for exporting dependency graphs
"""

import logging
from subprocess import CalledProcessError
from typing import Optional

from graphviz import Digraph, ExecutableNotFound

from dependency_graph import DependencyGraph
from worker import ALPHABET, base_duration


def build_digraph(
    graph: DependencyGraph,
    overhead: int = 0,
    order: Optional[str] = None,
    alphabet: str = ALPHABET,
) -> Digraph:
    """Build a graphviz Digraph with task durations and, optionally, completion positions"""
    position = {task: i for i, task in enumerate(order or "", 1)}

    dot = Digraph(comment="Task Dependencies")
    dot.attr(rankdir="LR")
    dot.attr("node", shape="box")

    # Add nodes, highlighting scheduled tasks
    for task in graph.tasks:
        label = f"{task}\n{base_duration(task, alphabet) + overhead} ticks"
        if task in position:
            label = f"#{position[task]} {label}"
            dot.node(task, label=label, style="filled", fillcolor="lightgreen")
        else:
            dot.node(task, label=label, style="filled", fillcolor="lightblue")

    for prerequisite, dependent in sorted(graph.graph.edges):
        dot.edge(prerequisite, dependent)

    return dot


def export_dag(
    graph: DependencyGraph,
    filename: str = "task_dag.dot",
    overhead: int = 0,
    order: Optional[str] = None,
    render: bool = True,
    alphabet: str = ALPHABET,
) -> str:
    """Export dependency graph in DOT format and generate PNG using graphviz library"""
    logging.info(f"Exporting DAG to {filename}...")

    dot = build_digraph(graph, overhead, order, alphabet)
    dot.save(filename)
    logging.info(f"Exported DOT file to {filename}")

    if render:
        dot_path = filename[: -len(".dot")] if filename.endswith(".dot") else filename
        try:
            dot.render(dot_path, format="png", cleanup=False)
            logging.info(f"Generated image: {dot_path}.png")
        except (ExecutableNotFound, CalledProcessError) as e:
            logging.warning(f"Failed to generate PNG: {e}")

    return filename

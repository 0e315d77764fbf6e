#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Alignment pipeline orchestrator.

Runs the end-to-end three-sequence alignment:
  1. read_sequences - load the three FASTA inputs
  2. build_graph    - write the edit graph description
  3. find_path      - load the graph and run the highest-weight path search
  4. report         - write the result report

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from trialign.graph_core.edit_graph_builder import EditGraphBuilder
from trialign.graph_core.wda_graph import PathResult, WDAGraph
from trialign.io.io_core_module import SequenceRecord, read_sequence
from trialign.io_utils.result_export import REPORT_EXTENSIONS, export_report


PIPELINE_STEPS = ['read_sequences', 'build_graph', 'find_path', 'report']


def default_graph_filename(sequence_files: List[str]) -> str:
    """Graph file name derived from the input names: <f1>_<f2>_<f3>.graph.txt"""
    return "_".join(Path(f).name for f in sequence_files) + ".graph.txt"


class AlignmentPipeline:
    """
    Orchestrator for a three-sequence edit-graph alignment.

    Manages:
    - Input loading (FASTA)
    - Edit graph construction and serialization
    - Highest-weight path search
    - Report export and logging setup

    Expected config layout: the sections of ``DEFAULT_CONFIG`` plus
    ``runtime.output_dir`` and ``runtime.sequences`` (three FASTA paths).
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize pipeline.

        Args:
            config: Pipeline configuration dictionary
        """
        self.config = config
        self.output_dir = Path(config['runtime']['output_dir'])
        self.output_dir.mkdir(parents=True, exist_ok=True)

        sequence_files = list(config['runtime']['sequences'])
        if len(sequence_files) != 3:
            raise ValueError(f"Exactly three sequence files are required, got {len(sequence_files)}")

        # Setup logging
        log_level = getattr(logging, config['output']['logging']['level'].upper())
        logging.basicConfig(
            level=log_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.FileHandler(self.output_dir / config['output']['logging']['log_file']),
                logging.StreamHandler()
            ]
        )
        self.logger = logging.getLogger(__name__)

        self.steps = list(PIPELINE_STEPS)

        # Runtime state
        self.state: Dict[str, Any] = {
            'current_step': None,
            'completed_steps': [],
            'sequence_files': sequence_files,
            'sequences': [],
            'graph_file': None,
            'graph_stats': None,
            'result': None,
            'report_file': None,
        }

    @property
    def graph_path(self) -> Path:
        graph_file = self.config['graph'].get('graph_file')
        if graph_file:
            return Path(graph_file)
        return self.output_dir / default_graph_filename(self.state['sequence_files'])

    @property
    def report_path(self) -> Path:
        report_file = self.config['output'].get('report_file')
        if report_file:
            return Path(report_file)
        fmt = self.config['output']['format']
        return self.output_dir / f"alignment_report{REPORT_EXTENSIONS[fmt]}"

    def run(self) -> Dict[str, Any]:
        """
        Run every pipeline step in order.

        Returns:
            Pipeline execution summary
        """
        self.logger.info("=" * 60)
        self.logger.info("Starting TriAlign Pipeline")
        self.logger.info("=" * 60)

        for i, step in enumerate(self.steps):
            self.state['current_step'] = step
            self.logger.info(f"STEP {i + 1}/{len(self.steps)}: {step.upper()}")

            try:
                self._execute_step(step)
                self.state['completed_steps'].append(step)
            except Exception as e:
                self.logger.error(f"Step {step} failed: {e}")
                raise

        result: PathResult = self.state['result']
        self.logger.info("Pipeline Complete!")

        return {
            "status": "success",
            "steps_completed": len(self.state['completed_steps']),
            "output_dir": str(self.output_dir),
            "graph_file": str(self.state['graph_file']) if self.state['graph_file'] else None,
            "report_file": str(self.state['report_file']),
            "path_found": result.found,
            "score": result.score,
        }

    def _execute_step(self, step: str):
        """Execute a single pipeline step."""
        if step == 'read_sequences':
            self._step_read_sequences()
        elif step == 'build_graph':
            self._step_build_graph()
        elif step == 'find_path':
            self._step_find_path()
        elif step == 'report':
            self._step_report()
        else:
            raise ValueError(f"Unknown step: {step}")

    def _step_read_sequences(self):
        records: List[SequenceRecord] = []
        for sequence_file in self.state['sequence_files']:
            record = read_sequence(sequence_file)
            self.logger.info(f"  {sequence_file}: {record.id} ({record.length:,} residues)")
            records.append(record)
        self.state['sequences'] = records

    def _step_build_graph(self):
        builder = EditGraphBuilder(
            constrain_endpoints=self.config['graph']['constrain_endpoints']
        )
        seq1, seq2, seq3 = (record.sequence for record in self.state['sequences'])

        stats = builder.build_graph_file(seq1, seq2, seq3, self.graph_path)
        self.state['graph_file'] = stats.graph_path
        self.state['graph_stats'] = stats
        self.logger.info(f"✓ Graph file built: {stats.graph_path}")

    def _step_find_path(self):
        graph_path: Path = self.state['graph_file']
        graph = WDAGraph.from_file(graph_path)
        graph.find_highest_weight_path()
        self.state['result'] = graph.result()

        if not self.config['graph']['keep_graph_file']:
            graph_path.unlink()
            self.state['graph_file'] = None
            self.logger.debug(f"Removed graph file {graph_path}")

    def _step_report(self):
        self.state['report_file'] = export_report(
            self.state['result'],
            self.report_path,
            fmt=self.config['output']['format'],
            sequences=self.state['sequences'],
        )
        self.logger.info(f"✓ Report saved: {self.state['report_file']}")

    @property
    def result(self) -> Optional[PathResult]:
        return self.state['result']

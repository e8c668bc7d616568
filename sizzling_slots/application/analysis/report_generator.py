# sizzling_slots/application/analysis/report_generator.py
import logging
import json
import os
import time
from typing import Dict, Any


class ReportGenerator:
    """
    Writes simulation summaries to disk.
    """
    def __init__(self, output_dir: str = "reports"):
        self.logger = logging.getLogger("application.analysis.report")
        self.output_dir = output_dir

        os.makedirs(output_dir, exist_ok=True)

    def generate_rtp_report(self, summary: Dict[str, Any], machine_info: Dict[str, Any] = None) -> str:
        """
        Generate a JSON report of an RTP simulation.

        Args:
            summary: Output of RTPSimulator.run
            machine_info: Optional SlotMachine.get_info() for context

        Returns:
            Path to the generated report file
        """
        self.logger.info("Generating RTP report")

        report = {
            "generated_at": time.strftime("%Y-%m-%d %H:%M:%S"),
            "machine": machine_info or {},
            "simulation_summary": summary,
        }

        timestamp = time.strftime("%Y%m%d-%H%M%S")
        machine_id = summary.get("machine_id") or "machine"
        filepath = os.path.join(self.output_dir, f"rtp_report_{machine_id}_{timestamp}.json")

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        self.logger.info(f"RTP report saved to {filepath}")
        return filepath

"""Volcado opcional de cada análisis a disco para depuración.

Por cada análisis se escriben dos archivos JSON en el directorio configurado:
- `debug_<marca>.json`: fuente y resultado juntos
- `analysis_result_<marca>.json`: solo la respuesta de `/analyze`

Un fallo de escritura se registra como advertencia y nunca afecta al
resultado devuelto al cliente.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..domain.analysis_models import AnalysisResult
from ..schemas import AnalyzeResp


logger = logging.getLogger(__name__)


def timestamp(now: Optional[datetime] = None) -> str:
    """Marca de tiempo con milisegundos: `2024-05-01_13-45-10-123`."""
    now = now or datetime.now()
    return now.strftime("%Y-%m-%d_%H-%M-%S-") + f"{now.microsecond // 1000:03d}"


class DebugRecorder:
    """Escribe los artefactos de depuración de un análisis."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def record(self, source: str, result: AnalysisResult) -> Optional[Path]:
        """
        Guarda fuente y resultado.

        Returns:
            Path del archivo combinado, o None si no pudo escribirse.
        """
        stamp = timestamp()
        # el mismo documento que recibe el cliente (`parseTree`, `errors`, ...)
        payload = AnalyzeResp.from_result(result).model_dump(mode="json", by_alias=True)
        debug_file = self.output_dir / f"debug_{stamp}.json"
        result_file = self.output_dir / f"analysis_result_{stamp}.json"

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            debug_file.write_text(
                json.dumps(
                    {"timestamp": stamp, "sourceCode": source, "analysisResult": payload},
                    ensure_ascii=False,
                    indent=2,
                ),
                encoding="utf-8",
            )
            result_file.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("No se pudo escribir el volcado de depuración en %s: %s", self.output_dir, e)
            return None

        logger.info("Volcado de depuración escrito en %s y %s", debug_file, result_file)
        return debug_file

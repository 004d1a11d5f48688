# pipeline.py
import yaml, json, logging
from pathlib import Path
from typing import Dict, List

from models.crm_response import NormalizedResult
from models.pipeline_config import PipelineConfig, ResponseInput
from models.response_errors import ApiError
from normalize.transformer import parse_response
from output.response_builder import build_response_output

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class DocumentTooLargeError(ValueError):
    pass


def load_yaml(path):
    with open(path) as f:
        return yaml.safe_load(f)


def load_config(path) -> PipelineConfig:
    return PipelineConfig.model_validate(load_yaml(path) or {})


def read_document(path, max_bytes: int) -> str:
    """Read a saved response, refusing anything over the configured size"""
    size = Path(path).stat().st_size
    if size > max_bytes:
        raise DocumentTooLargeError(f"{path} is {size} bytes, limit is {max_bytes}")
    with open(path, encoding="utf-8") as f:
        return f.read()


class FileConnector:
    def __init__(self, cfg: PipelineConfig, base_dir: Path):
        self.inputs = cfg.inputs
        self.max_bytes = cfg.settings.max_document_bytes
        self.base_dir = base_dir

    def read(self):
        for item in self.inputs:
            path = self.base_dir / item.path
            yield item, read_document(path, self.max_bytes)


class Normalizer:
    def __init__(self, documents):
        self.documents = documents

    def run(self) -> List[Dict]:
        outputs = []
        for item, document in self.documents:
            outputs.append(self.normalize(item, document))
        return outputs

    def normalize(self, item: ResponseInput, document: str) -> Dict:
        try:
            result: NormalizedResult = parse_response(document, item.module, item.method)
        except ApiError as e:
            # The service answered with an error; that is a result, not a failure
            logger.warning(f"{item.path}: CRM error {e.code}: {e.message}")
            return {
                "module": item.module,
                "method": item.method,
                "error": {"uri": e.uri, "code": e.code, "message": e.message},
            }
        except ValueError as e:
            logger.error(f"Failed to normalize {item.path}: {e}")
            raise

        if not result.looks_successful():
            logger.info(f"{item.path}: {result.status_message or 'no status message'}")
        return build_response_output(result)


class JSONConnector:
    def __init__(self, path):
        self.path = path

    def send(self, outputs: List[Dict]):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(outputs, f, indent=2)
        logger.info(f"Wrote {len(outputs)} normalized responses to {self.path}")


def run_pipeline(config_path: str) -> List[Dict]:
    logger.info(f"Loading pipeline config from {config_path}")
    try:
        cfg = load_config(config_path)
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        raise

    logging.getLogger().setLevel(cfg.settings.log_level)
    base_dir = Path(config_path).resolve().parent

    documents = FileConnector(cfg, base_dir).read()
    outputs = Normalizer(documents).run()
    logger.info(f"Processing complete: {len(outputs)} responses normalized")

    if cfg.output.path:
        JSONConnector(base_dir / cfg.output.path).send(outputs)
    return outputs

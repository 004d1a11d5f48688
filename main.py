# main.py
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from pipeline import read_document, run_pipeline
from models.pipeline_config import DEFAULT_MAX_DOCUMENT_BYTES
from models.response_errors import ApiError, CRMResponseError
from normalize.transformer import parse_response
from output.response_builder import build_records_frame, build_response_output
import uvicorn
import fire
import json
import logging
import os

# Configure logger
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

MAX_DOCUMENT_BYTES = int(os.environ.get("CRM_MAX_DOCUMENT_BYTES", DEFAULT_MAX_DOCUMENT_BYTES))

# Initialize FastAPI app
app = FastAPI()


class ParseRequest(BaseModel):
    document: str
    module: str
    method: str


@app.get("/")
def read_root():
    return {"CRM Normalizer": "Service is live. POST a response document to /parse."}


@app.post("/parse")
def parse_document(request: ParseRequest):
    if len(request.document.encode("utf-8")) > MAX_DOCUMENT_BYTES:
        raise HTTPException(status_code=413, detail=f"Document exceeds {MAX_DOCUMENT_BYTES} bytes")

    logger.info(f"Parsing {request.method} response for {request.module}")
    try:
        result = parse_response(request.document, request.module, request.method)
    except ApiError as e:
        logger.error(f"CRM returned error {e.code}: {e.message}")
        raise HTTPException(
            status_code=502,
            detail={"uri": e.uri, "code": e.code, "message": e.message},
        )
    except CRMResponseError as e:
        logger.error(f"Failed to parse response: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return build_response_output(result)


def parse_file(path: str, module: str, method: str, output_format: str = "json"):
    """
    Parse a saved CRM response file and print it as JSON or CSV
    Used from the command line
    """
    if output_format not in ("json", "csv"):
        raise ValueError(f"Unsupported output format: {output_format}")

    document = read_document(path, MAX_DOCUMENT_BYTES)
    result = parse_response(document, module, method)

    if output_format == "csv":
        return build_records_frame(result).to_csv(index=False)
    return json.dumps(build_response_output(result), indent=2)


# CLI entrypoint using python-fire
def cli():
    fire.Fire({
        "parse_file": parse_file,
        "run_pipeline": run_pipeline,
    })


# Entry point for CLI or server
if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)

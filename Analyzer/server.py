"""
Text Analyzer backend
=====================

Answers questions about text a user selected on a web page. The browser
extension posts {selectedText, question, pageUrl, pageContent}; the service
builds a prompt, tries each configured LLM in order until one answers, and
returns {answer, usage}.

Request pipeline:
- Quota ledger: per-caller, per-day request ceiling (in memory)
- Context assembler: selection + page URL + truncated page content
- Prompt builder: fixed instruction template ending in an "Answer:" cue
- Model invoker: LiteLLM calls over an ordered candidate list
- Request handler: validation, admission, invocation, error shaping

Project Structure:
- config/: Environment-based settings
- core/: Error taxonomy and quota ledger
- pipeline/: Context, prompt, model fallback and request handler
- api/: FastAPI application and models
"""
import logging
import uvicorn

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Import FastAPI app from api module
from Analyzer.api import app
from Analyzer.config import config


def main():
    logger.info(f"Text Analyzer backend running on port {config.PORT}")
    logger.info(f"Candidate models: {', '.join(config.LLM_CANDIDATE_MODELS)}")
    logger.info(f"Health check: http://localhost:{config.PORT}/api/health")

    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()

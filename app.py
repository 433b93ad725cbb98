import os
import logging
from datetime import datetime
from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.utils import secure_filename

# Import configuration and processing functions
from config import Config, UPLOAD_FOLDER, API_HOST, API_PORT, API_DEBUG, API_VERSION, MAX_FILE_SIZE
from ai_processor import ContractAnalyzer, load_pdf_text
from errors import EmptyInputError
from schemas import AnalysisStatus
from store import ContractStore, record_update_from_result
from utils import (
    detect_contract_type, extract_contract_name,
    log_error_and_return, safe_file_cleanup, validate_pdf_file,
)

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- FLASK APP SETUP ---
app = Flask(__name__)
CORS(app)  # Cross-Origin Resource Sharing configuration for frontend compatibility

# File upload directory configuration
if not os.path.exists(UPLOAD_FOLDER):
    os.makedirs(UPLOAD_FOLDER)
app.config['UPLOAD_FOLDER'] = UPLOAD_FOLDER
app.config['MAX_CONTENT_LENGTH'] = MAX_FILE_SIZE

analyzer = ContractAnalyzer(Config)
contract_store = ContractStore()

logger.info("Flask application initialized")


def _record_response(record):
    return record.model_dump(mode="json")


def _run_analysis(contract_text):
    """Returns (response_dict, status_code) for an analyze request."""
    try:
        result = analyzer.analyze_contract(contract_text)
    except EmptyInputError as e:
        return log_error_and_return(str(e), 400)

    status_code = 200 if result.success else 500
    return result.to_response(), status_code


# --- API ENDPOINTS ---

@app.route('/ping', methods=['GET'])
def ping():
    """
    Health check endpoint to verify the server is running.
    Returns server status and timestamp.
    """
    return jsonify({
        "status": "ok",
        "message": "Contr'Act analysis API is running",
        "timestamp": datetime.now().isoformat(),
        "version": API_VERSION
    }), 200


@app.route('/analyze-contract', methods=['POST'])
def analyze_contract():
    """
    Contract analysis endpoint. The optional 'action' field selects
    'ask', 'negotiate' or 'legal'; without it the contract text is analyzed.
    """
    try:
        data = request.get_json(silent=True) or {}
        action = data.get('action')
        contract_context = data.get('contractContext') or data.get('contractText') or ""

        if action == 'ask':
            answer = analyzer.ask_question(data.get('question') or "", contract_context)
            return jsonify({"answer": answer}), 200

        if action == 'negotiate':
            advice = analyzer.negotiation_advice(contract_context, data.get('redFlags'))
            return jsonify({"advice": advice}), 200

        if action == 'legal':
            expertise = analyzer.legal_expertise(contract_context, data.get('redFlags'))
            return jsonify({"expertise": expertise}), 200

        if action:
            body, status_code = log_error_and_return(f"Unknown action: {action}", 400)
            return jsonify(body), status_code

        body, status_code = _run_analysis(data.get('contractText') or "")
        return jsonify(body), status_code

    except Exception as e:
        logger.error(f"Error in analyze-contract endpoint: {str(e)}")
        return jsonify({"success": False, "error": "Erreur lors de l'analyse du contrat"}), 500


@app.route('/analyze', methods=['POST'])
def analyze_document():
    """
    Handles PDF contract upload, analysis and storage of the result.
    """
    filepath = None

    try:
        # Validate file upload
        if 'file' not in request.files:
            return jsonify({"error": "No file part in the request"}), 400

        file = request.files['file']
        is_valid, error_message = validate_pdf_file(file)
        if not is_valid:
            return jsonify({"error": error_message}), 400

        # Save file securely
        filename = secure_filename(file.filename)
        filepath = os.path.join(app.config['UPLOAD_FOLDER'], filename)
        file.save(filepath)

        logger.info(f"Processing document: {filename}")
        contract_text = load_pdf_text(filepath)

        record = contract_store.create(
            name=extract_contract_name(file.filename, contract_text),
            contract_type=detect_contract_type(contract_text, file.filename),
            contract_text=contract_text,
        )

        try:
            result = analyzer.analyze_contract(contract_text)
        except EmptyInputError as e:
            contract_store.update(record.id, status=AnalysisStatus.FAILED)
            body, status_code = log_error_and_return(str(e), 400)
            return jsonify(body), status_code

        record = contract_store.update(record.id, **record_update_from_result(result))
        logger.info(f"Document processed: {filename} ({record.status.value})")

        body = _record_response(record)
        if not result.success:
            body["error"] = result.error
            return jsonify(body), 500
        return jsonify(body), 200

    except Exception as e:
        # Error handling for processing failures
        logger.error(f"Document analysis failed: {str(e)}")
        return jsonify({"error": f"An error occurred during analysis: {str(e)}"}), 500

    finally:
        # Temporary file cleanup
        if filepath:
            safe_file_cleanup(filepath)


@app.route('/analyses', methods=['GET'])
def list_analyses():
    """Lists stored analyses, newest first."""
    limit = request.args.get('limit', type=int)
    records = contract_store.recent(limit) if limit else contract_store.all()
    return jsonify([_record_response(record) for record in records]), 200


@app.route('/analyses/<analysis_id>', methods=['GET'])
def get_analysis(analysis_id):
    record = contract_store.get(analysis_id)
    if record is None:
        return jsonify({"error": f"Analysis '{analysis_id}' not found"}), 404
    return jsonify(_record_response(record)), 200


# --- RUN THE APP ---
if __name__ == '__main__':
    # Application server configuration
    logger.info(f"Starting Contr'Act analysis API on {API_HOST}:{API_PORT}")
    app.run(host=API_HOST, port=API_PORT, debug=API_DEBUG)

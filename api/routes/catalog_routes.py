"""Read-only catalog listings served straight from the fixture."""

from flask import Blueprint, current_app, jsonify

from data.storage import MockStorage

catalog_bp = Blueprint('catalog', __name__)

def get_storage() -> MockStorage:
    return current_app.config['MOCK_STORAGE']

@catalog_bp.route('/tools', methods=['GET'])
def list_tools():
    return jsonify(get_storage().get_all_tools()), 200

@catalog_bp.route('/vps', methods=['GET'])
def list_vps():
    return jsonify(get_storage().get_all_vps()), 200

@catalog_bp.route('/proxies', methods=['GET'])
@catalog_bp.route('/proxy', methods=['GET'])
def list_proxies():
    return jsonify(get_storage().get_all_proxies()), 200

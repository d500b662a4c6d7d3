from flask import Blueprint, jsonify, request

from ..extensions import get_store

bp = Blueprint("collections", __name__)


@bp.get("/")
def api_snapshot():
    return jsonify(get_store().snapshot())


@bp.get("/<name>")
def api_list(name: str):
    records = get_store().list(
        name,
        page=request.args.get("page"),
        page_size=request.args.get("page_size"),
    )
    return jsonify({name: records})


@bp.get("/<name>/<entity_id>")
def api_get(name: str, entity_id: str):
    return jsonify(get_store().get(name, entity_id))


@bp.post("/<name>")
def api_create(name: str):
    snapshot = get_store().create(name, request.get_json(force=True, silent=True))
    return jsonify(snapshot), 201


@bp.put("/<name>/<entity_id>")
def api_update(name: str, entity_id: str):
    get_store().update(name, entity_id, request.get_json(force=True, silent=True))
    return "", 204


@bp.delete("/<name>/<entity_id>")
def api_delete(name: str, entity_id: str):
    get_store().delete(name, entity_id)
    return "", 204

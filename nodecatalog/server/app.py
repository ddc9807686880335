from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from nodecatalog.config import NodeSettings
from nodecatalog.errors import (
    BackendError,
    EnvironmentNotFound,
    FactsRetrievalError,
    InvalidArgument,
)
from nodecatalog.models.facts import Facts
from nodecatalog.service import NodeService

import logging

# ============================================================
# LOGGING
# ============================================================

logger = logging.getLogger("nodecatalog.server")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

# ============================================================
# Models
# ============================================================

class NodeResponse(BaseModel):
    name: str
    environment: str
    classes: List[str] = []
    parameters: Dict[str, Any] = {}

class NamesResponse(BaseModel):
    name: str
    names: List[str]

class FactsUploadRequest(BaseModel):
    values: Dict[str, Any]
    expiration: Optional[float] = None


# ============================================================
# App Factory
# ============================================================

def create_app(service: NodeService) -> FastAPI:

    app = FastAPI(title="nodecatalog", version="0.1.0")
    app.state.service = service

    def _lookup(name: str, environment: Optional[str], merge_facts: bool):
        try:
            if merge_facts:
                node = service.prepare(name, environment=environment)
            else:
                node = service.find(name, environment)

            if node is None:
                raise HTTPException(status_code=404, detail=f"Node '{name}' not found")

            # Resolve inside the guarded block so unknown environments map to 404
            _ = node.environment
            return node

        except EnvironmentNotFound as e:
            raise HTTPException(status_code=404, detail=str(e))

        except InvalidArgument as e:
            raise HTTPException(status_code=400, detail=str(e))

        except (FactsRetrievalError, BackendError) as e:
            logger.warning("[NODES] Backend failure for %s: %s", name, e)
            raise HTTPException(status_code=502, detail=str(e))

    # ------------------------------------------------------------
    # Health
    # ------------------------------------------------------------

    @app.get("/health")
    def health():
        return service.health()

    # ------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------

    @app.get(
        "/nodes/{name}",
        response_model=NodeResponse,
        response_model_exclude_unset=True,
    )
    def get_node(name: str, environment: Optional[str] = None, merge_facts: bool = True):
        node = _lookup(name, environment, merge_facts)
        return node.to_data_hash()

    @app.get("/nodes/{name}/names", response_model=NamesResponse)
    def get_node_names(name: str, environment: Optional[str] = None):
        node = _lookup(name, environment, merge_facts=True)
        return NamesResponse(name=node.name, names=node.names())

    # ------------------------------------------------------------
    # Facts
    # ------------------------------------------------------------

    @app.get("/facts/{name}")
    def get_facts(name: str, environment: Optional[str] = None):
        env = service.context.environments.get(environment) if environment else None

        try:
            facts = service.context.facts_store.find(name, env)
        except BackendError as e:
            raise HTTPException(status_code=502, detail=str(e))

        if facts is None:
            raise HTTPException(status_code=404, detail=f"No facts for '{name}'")

        return facts.to_data_hash()

    @app.put("/facts/{name}", status_code=status.HTTP_201_CREATED)
    def put_facts(name: str, request: FactsUploadRequest):
        try:
            facts = Facts(name=name, values=request.values, expiration=request.expiration)
            facts.add_local_facts()
            facts.sanitize()
            service.context.facts_store.save(facts)

        except InvalidArgument as e:
            raise HTTPException(status_code=400, detail=str(e))

        except BackendError as e:
            logger.exception("[FACTS] Save failed")
            raise HTTPException(status_code=502, detail=str(e))

        return {"status": "saved", "node": name, "count": len(facts.values)}

    return app


# ============================================================
# Default Instance
# ============================================================

app = create_app(NodeService.from_settings(NodeSettings.from_env()))

from fastapi import Body, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum
from pydantic import BaseModel, Field
from threading import Lock
from typing import Any, Optional
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rulesengine import (
    Event, LaunchRulesEngine, RuleConsequence, RulesDefinitionError,
    Settings, DelimiterPair, EventTokenFinder, __version__, render,
)
from rulesengine.log import configure_logging

settings = Settings.from_env()
if settings.log_level:
    logging.basicConfig()
    configure_logging(settings.log_level.upper())

app = FastAPI(
    title="Rules Engine API",
    description="Evaluates events against rule sets and renders token templates",
    version=__version__,
    root_path="/api"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

rules_engine = LaunchRulesEngine(settings)
engine_lock = Lock()


class RuleSetResponse(BaseModel):
    rule_count: int
    message: str


class ConsequencesResponse(BaseModel):
    matched_rules: int
    consequences: list[RuleConsequence]


class RenderRequest(BaseModel):
    template: str
    data: Optional[dict[str, Any]] = None
    start_tag: str = Field(default="{{", min_length=1)
    end_tag: str = Field(default="}}", min_length=1)


class RenderResponse(BaseModel):
    result: Optional[str]


@app.get("/health")
def health_check():
    return {"status": "healthy", "service": "rules-engine"}


@app.get("/rules", response_model=RuleSetResponse)
def get_rules():
    with engine_lock:
        return RuleSetResponse(rule_count=len(rules_engine.rules), message="Current rule set")


@app.put("/rules", response_model=RuleSetResponse)
def replace_rules(document: dict[str, Any] = Body(...)):
    try:
        with engine_lock:
            loaded = rules_engine.load_rules(document)
            total = len(rules_engine.rules)
    except RulesDefinitionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return RuleSetResponse(rule_count=total, message=f"Loaded {len(loaded)} rules")


@app.post("/rules", response_model=RuleSetResponse, status_code=status.HTTP_201_CREATED)
def add_rules(document: dict[str, Any] = Body(...)):
    try:
        with engine_lock:
            added = rules_engine.add_rules(document)
            total = len(rules_engine.rules)
    except RulesDefinitionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return RuleSetResponse(rule_count=total, message=f"Added {len(added)} rules")


@app.delete("/rules", response_model=RuleSetResponse)
def clear_rules():
    with engine_lock:
        rules_engine.clear_rules()
    return RuleSetResponse(rule_count=0, message="Rules cleared")


@app.post("/events", response_model=ConsequencesResponse)
def process_event(event: Event):
    with engine_lock:
        matched = rules_engine.process(event)
        consequences = rules_engine.consequences_for(event, matched)
    return ConsequencesResponse(matched_rules=len(matched), consequences=consequences)


@app.post("/templates/render", response_model=RenderResponse)
def render_template(request: RenderRequest):
    token_finder = EventTokenFinder(Event(type="", source="", data=request.data))
    delimiter = DelimiterPair(request.start_tag, request.end_tag)
    return RenderResponse(result=render(request.template, token_finder, rules_engine.transformer, delimiter))


handler = Mangum(app)

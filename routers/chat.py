# D:\github\ROADBOT_NL_BACK\routers\chat.py
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.chat import ChatRequest

router = APIRouter(prefix="/api", tags=["chat"])

@router.post("/chat")
async def chat(request: Request):
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "Invalid request body", "details": "body is not JSON"}, status_code=400)
    try:
        req = ChatRequest.model_validate(body)
    except ValidationError as e:
        return JSONResponse(
            {"error": "Invalid request body", "details": e.errors(include_url=False, include_context=False)},
            status_code=400,
        )

    reply = await request.app.state.bot.process_turn(req.query, req.history)
    return {"reply": reply}

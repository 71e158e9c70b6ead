from fastapi import APIRouter
from .pdf_tool import router as pdf_tool_router

router = APIRouter()
router.include_router(pdf_tool_router)

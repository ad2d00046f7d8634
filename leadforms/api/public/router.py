from fastapi import APIRouter
from leadforms.api.public import forms, leads

router = APIRouter()
router.include_router(forms.router, prefix="/form-templates", tags=["Public"])
router.include_router(leads.router, prefix="/leads", tags=["Public"])

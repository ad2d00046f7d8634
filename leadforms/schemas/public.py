from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any


class PublicLeadCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    email: Optional[str] = None
    site_id: Optional[str] = Field(default=None, alias="siteId")
    form_template_id: Optional[str] = Field(default=None, alias="formTemplateId")
    form_type: Optional[str] = Field(default=None, alias="formType")
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    phone: Optional[str] = None
    form_data: Optional[Dict[str, Any]] = Field(default=None, alias="formData")

# routers/contact.py

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import BaseModel
from pymongo.database import Database
from pymongo.errors import PyMongoError

import crud
import mailer
from config import settings
from database import get_db
from errors import InternalError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Contact"])


class ContactForm(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None


@router.post("/contact")
def submit_contact(
    form: ContactForm,
    background_tasks: BackgroundTasks,
    db: Database = Depends(get_db),
    mail: mailer.Mailer = Depends(mailer.get_mailer),
):
    try:
        contact = crud.create_contact(db, form.name, form.email, form.message)
    except PyMongoError as e:
        logger.error("Error saving contact form submission: %s", e)
        raise InternalError("Internal server error")
    logger.info("Contact form submission saved: %s", contact["_id"])

    # Best effort: sent after the response, failures are only logged
    subject, text = mailer.contact_notification(form.name, form.email, form.message)
    background_tasks.add_task(mailer.send_best_effort, mail, settings.CONTACT_INBOX, subject, text)

    return {"message": "Message received successfully!"}

"""
Candidacy application endpoint.

Multipart form: application fields plus a required ``photo`` and an
optional ``proof`` document.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from api.deps import get_election_service
from models.election import Candidate
from schemas.candidate import CandidateApplication
from services.election_service import ElectionService
from services.storage_service import FileUpload

router = APIRouter()


async def _to_file_upload(file: Optional[UploadFile]) -> Optional[FileUpload]:
    if file is None:
        return None
    return FileUpload(
        filename=file.filename or "upload",
        content=await file.read(),
        content_type=file.content_type,
    )


@router.post("", response_model=Candidate, status_code=status.HTTP_201_CREATED)
async def apply_candidate(
    service: Annotated[ElectionService, Depends(get_election_service)],
    election_id: Annotated[str, Form()],
    district_id: Annotated[str, Form()],
    name: Annotated[str, Form(min_length=1, max_length=100)],
    manifesto: Annotated[Optional[str], Form(max_length=5000)] = None,
    photo: Annotated[Optional[UploadFile], File()] = None,
    proof: Annotated[Optional[UploadFile], File()] = None,
) -> Candidate:
    """Apply as a candidate; the application starts in PENDING status."""
    application = CandidateApplication(
        election_id=election_id,
        district_id=district_id,
        name=name,
        manifesto=manifesto,
    )
    return await service.apply_candidate(
        application,
        photo=await _to_file_upload(photo),
        proof=await _to_file_upload(proof),
    )

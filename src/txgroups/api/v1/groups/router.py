"""Group API Routes - Route registration only."""

from fastapi import APIRouter

from txgroups.api.v1 import GROUPS_PREFIX
from txgroups.api.v1.groups import api

router = APIRouter()
router.include_router(api.router, prefix=GROUPS_PREFIX, tags=["groups"])

"""v1 API 라우터 패키지 — 모든 v1 엔드포인트 통합.

v1 API Router package — Aggregates team and member endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - teams: 팀 생성/조회 (Team create/read)
    - member_queries: 집계/조인/서브쿼리/CASE/벌크 (Analytics and bulk statements)
    - members: 회원 CRUD 및 조건 검색 (Member CRUD and condition search)
"""

from fastapi import APIRouter

from querylab.api.v1.member_queries import router as member_queries_router
from querylab.api.v1.members import router as members_router
from querylab.api.v1.teams import router as teams_router

api_router: APIRouter = APIRouter()

api_router.include_router(teams_router, prefix="/teams", tags=["Teams"])
# 쿼리/벌크 경로를 /{member_id} 보다 먼저 등록 (Static paths registered before /{member_id})
api_router.include_router(member_queries_router, prefix="/members", tags=["Member Queries"])
api_router.include_router(members_router, prefix="/members", tags=["Members"])

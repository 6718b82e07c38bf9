from fastapi import FastAPI
from ethicaldrive.routes.health_route import router as health_router
from ethicaldrive.routes.scenario_route import router as scenario_router
from ethicaldrive.routes.decide_route import router as decide_router
from ethicaldrive.routes.analyze_route import router as analyze_router

app = FastAPI(
    title="EthicalDrive",
    version="1.0.0"
)

app.include_router(health_router, tags=["health"])
app.include_router(scenario_router, tags=["scenarios"])
app.include_router(decide_router, tags=["decision"])
app.include_router(analyze_router, tags=["analysis"])

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from fleet import (
    Building,
    BuildingConfig,
    ElevatorTiming,
    RandomRequestSource,
    Request,
)

logger = logging.getLogger(__name__)


class BuildingSettings(BaseModel):
    num_floors: int = 11
    num_elevators: int = 8
    elevator_capacity: int = 3
    door_open_ticks: int = Field(3, ge=1)
    idle_ticks: int = Field(5, ge=1)
    policy: str = "terminal"
    autostart: bool = True


class RideRequest(BaseModel):
    start_floor: int
    end_floor: int


class RandomBatchRequest(BaseModel):
    count: int = Field(10, ge=0, le=10_000)
    seed: Optional[int] = None


class StepRequest(BaseModel):
    ticks: int = Field(1, ge=1, le=10_000)


class SimulationManager:
    """Holds one building and serialises access to it for the web handlers."""

    def __init__(self, config: Optional[BuildingConfig] = None, autostart: bool = True) -> None:
        self.subscribers: Set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self.rebuild(config or BuildingConfig(), autostart=autostart)

    def rebuild(self, config: BuildingConfig, autostart: bool = True) -> None:
        self.building = Building.from_config(config)
        self.traffic = RandomRequestSource(config.num_floors)
        if autostart:
            self.building.start()
        logger.info(
            "Building ready: %d floors, %d elevators, capacity %d",
            config.num_floors, config.num_elevators, config.elevator_capacity,
        )

    def current_state(self) -> dict:
        snapshot = self.building.status_snapshot()
        return {
            "time": self.building.current_time,
            "building": snapshot.to_dict(),
            "report": str(snapshot),
        }

    async def publish(self, state: dict) -> None:
        """Push a state payload to every stream subscriber, dropping dead sockets."""
        stale: List[WebSocket] = []
        for subscriber in list(self.subscribers):
            try:
                await subscriber.send_json(state)
            except (WebSocketDisconnect, RuntimeError):
                stale.append(subscriber)
        for subscriber in stale:
            self.unsubscribe(subscriber)

    async def subscribe(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.subscribers.add(websocket)
        logger.debug("Stream subscriber connected (%d open)", len(self.subscribers))
        await websocket.send_json(self.current_state())

    def unsubscribe(self, websocket: WebSocket) -> None:
        self.subscribers.discard(websocket)
        logger.debug("Stream subscriber gone (%d open)", len(self.subscribers))

    async def configure(self, settings: BuildingSettings) -> dict:
        config = BuildingConfig(
            num_floors=settings.num_floors,
            num_elevators=settings.num_elevators,
            elevator_capacity=settings.elevator_capacity,
            timing=ElevatorTiming(settings.door_open_ticks, settings.idle_ticks),
            policy=settings.policy,
        )
        async with self._lock:
            self.rebuild(config, autostart=settings.autostart)
            state = self.current_state()
        await self.publish(state)
        return state

    async def start(self) -> dict:
        async with self._lock:
            started = self.building.start()
            state = self.current_state()
        state["started"] = started
        await self.publish(state)
        return state

    async def stop(self) -> dict:
        async with self._lock:
            self.building.stop()
            state = self.current_state()
        await self.publish(state)
        return state

    async def step(self, ticks: int) -> dict:
        async with self._lock:
            self.building.run(ticks)
            state = self.current_state()
        await self.publish(state)
        return state

    async def add_request(self, start_floor: int, end_floor: int) -> dict:
        async with self._lock:
            accepted = self.building.add_request(Request(start_floor, end_floor))
            state = self.current_state()
        state["accepted"] = accepted
        if accepted:
            await self.publish(state)
        return state

    async def add_random_requests(self, count: int, seed: Optional[int]) -> dict:
        async with self._lock:
            if seed is not None:
                self.traffic = RandomRequestSource(self.building.num_floors, random_seed=seed)
            accepted = self.traffic.feed(self.building, count)
            state = self.current_state()
        state["accepted"] = accepted
        await self.publish(state)
        return state


manager = SimulationManager()
app = FastAPI(title="Elevator Dispatch Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/building")
async def configure_building(settings: BuildingSettings) -> dict:
    try:
        return await manager.configure(settings)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/start")
async def start_system() -> dict:
    state = await manager.start()
    if not state["started"]:
        raise HTTPException(status_code=409, detail="Elevator system cannot be started while it is stopping")
    return state


@app.post("/stop")
async def stop_system() -> dict:
    return await manager.stop()


@app.post("/step")
async def step_system(request: StepRequest) -> dict:
    return await manager.step(request.ticks)


@app.post("/requests")
async def add_request(request: RideRequest) -> dict:
    state = await manager.add_request(request.start_floor, request.end_floor)
    if not state["accepted"]:
        raise HTTPException(status_code=409, detail="Request could not be added")
    return state


@app.post("/requests/random")
async def add_random_requests(request: RandomBatchRequest) -> dict:
    return await manager.add_random_requests(request.count, request.seed)


@app.websocket("/ws/stream")
async def stream_state(websocket: WebSocket) -> None:
    # Clients get every state change; sending "refresh" asks for the current one.
    await manager.subscribe(websocket)
    try:
        async for message in websocket.iter_text():
            if message.strip() == "refresh":
                await websocket.send_json(manager.current_state())
    finally:
        manager.unsubscribe(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)

from datetime import datetime

from pydantic import BaseModel


class WeatherView(BaseModel):
    temperature_c: float
    weather_code: int
    description: str
    impact_factor: float
    source: str


class TrafficView(BaseModel):
    current_speed_kmh: float
    free_flow_speed_kmh: float
    congestion_level: float
    source: str


class ConditionsView(BaseModel):
    weather: WeatherView
    traffic: TrafficView
    weather_impact: float
    traffic_congestion: float
    fetched_at: datetime
    local_time: str

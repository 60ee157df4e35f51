"""
Data models for the leaderboard server
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Optional, Literal


class Submission(BaseModel):
    """One team's latest scored attempt (keyed by team_name)"""
    model_config = ConfigDict(populate_by_name=True)

    team_name: str = Field(alias="teamName")
    predictions: List[float]
    scores: Dict[str, float]          # metric id -> value, every registered metric
    submit_time: str = Field(alias="submitTime")  # display string
    predictions_count: int = Field(alias="predictionsCount")
    rank: Optional[int] = None        # derived by the ranking pass, never authoritative


class Settings(BaseModel):
    """Server configuration (config/leaderboard.yaml)"""
    default_metric: str = "rmse"
    accuracy_tolerance: float = 0.01
    storage: Literal["memory", "file"] = "file"
    data_dir: str = "data"
    admin_username: str = "admin"
    admin_password: str = "admin123"


class CsvUpload(BaseModel):
    """Already-decoded CSV text plus the name of the file it came from"""
    filename: str
    csv: str


class GroundTruthUpload(BaseModel):
    csv: str


class BatchUpload(BaseModel):
    files: List[CsvUpload]


class MetricSelection(BaseModel):
    metric: str

#app/schemas/team.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List

class TeamMember(BaseModel):
    """
    TeamMember — участник команды (в запросе на создание и в ответе).
    """
    user_id: str = Field(..., min_length=1, examples=["u1"], description="ID пользователя")
    username: str = Field(..., min_length=1, examples=["Alice"], description="Отображаемое имя")
    is_active: bool = Field(True, description="Может ли назначаться ревьювером")

    model_config = ConfigDict(from_attributes=True)

class TeamBase(BaseModel):
    """
    TeamBase — команда со списком участников.
    """
    team_name: str = Field(..., min_length=1, examples=["backend"], description="Название команды")
    members: List[TeamMember] = Field(default_factory=list, description="Участники команды")

class TeamCreate(TeamBase):
    """
    TeamCreate — создание команды; участники upsert-ятся в неё.
    """
    pass

class TeamRead(TeamBase):
    """
    TeamRead — схема для выдачи команды (response).
    """
    model_config = ConfigDict(from_attributes=True)

class TeamResponse(BaseModel):
    team: TeamRead

class TeamDeactivateRequest(BaseModel):
    """
    TeamDeactivateRequest — массовая деактивация участников команды.
    """
    team_name: str = Field(..., min_length=1, examples=["backend"])

class TeamDeactivateResponse(BaseModel):
    """
    TeamDeactivateResponse — итог массовой деактивации (best effort, по каждому PR отдельно).
    """
    team_name: str
    deactivated_users: List[str] = Field(default_factory=list, description="ID выключенных пользователей")
    reassigned_prs: List[str] = Field(default_factory=list, description="PR, где удалось заменить ревьювера")
    failed_reassignments: List[str] = Field(default_factory=list, description="PR, где замена не нашлась")

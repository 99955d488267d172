from pydantic import BaseModel


class CategoryName(BaseModel):
    id: str
    name: str | None = None


class CategoryRead(CategoryName):
    imageUrl: str | None = None


class CategoryUpdate(BaseModel):
    name: str | None = None
    imageUrl: str | None = None


class CategoryCreated(BaseModel):
    message: str
    category: CategoryRead


class CategoryUpdated(BaseModel):
    message: str
    updatedCategory: CategoryUpdate


class Message(BaseModel):
    message: str

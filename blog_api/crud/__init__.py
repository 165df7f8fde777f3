# CRUD operations grouped per resource; routers import them as
# `from blog_api.crud import post as crud_post`.

"""
Utilidades de autenticação JWT
Valida tokens emitidos pelo provedor de autenticação (fora deste serviço)
"""
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from ..config import settings

# HTTP Bearer scheme para o header Authorization
http_bearer = HTTPBearer(auto_error=False)

ADMIN_ROLE = "ADMIN"


def decode_token(token: str) -> dict:
    """
    Decodifica e valida um token JWT

    Args:
        token: Token JWT a decodificar

    Returns:
        dict: email, role, user_id e is_admin

    Raises:
        HTTPException: Se o token for inválido
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Não foi possível validar as credenciais",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        email: str = payload.get("sub")
        role: str = (payload.get("role") or "").upper()  # Normaliza para maiúsculas
        user_id = payload.get("user_id")

        if email is None:
            raise credentials_exception

        return {
            "email": email,
            "role": role,
            "user_id": str(user_id) if user_id is not None else None,
            "is_admin": role == ADMIN_ROLE or email == settings.ADMIN_EMAIL
        }

    except JWTError:
        raise credentials_exception


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(http_bearer)) -> dict:
    """
    Obtém o usuário atual a partir do token JWT

    Raises:
        HTTPException: Se o token for inválido ou estiver ausente
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token de autenticação obrigatório",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return decode_token(credentials.credentials)


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    """Verifica que o usuário atual é o admin do armazém"""
    if not current_user.get("is_admin"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Você não tem permissão de administrador"
        )
    return current_user


async def require_seller(current_user: dict = Depends(get_current_user)) -> dict:
    """Verifica que o usuário atual é um lojista identificado"""
    if current_user.get("is_admin") or not current_user.get("user_id"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Apenas lojistas podem executar esta operação"
        )
    return current_user

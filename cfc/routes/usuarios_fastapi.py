from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cfc import database
from cfc.auth import ContextoSessao, get_admin_user, get_password_hash
from cfc.models.usuario import PapelUsuario, Perfil, Usuario
from cfc.reautenticacao import confirmar_admin
from cfc.schemas.usuario import UsuarioCreate, UsuarioRead, UsuarioUpdate

router = APIRouter(
    tags=["Usuarios"],
    dependencies=[Depends(get_admin_user)]
)


def usuario_para_leitura(usuario: Usuario) -> dict:
    return {
        "id": usuario.id,
        "email": usuario.email,
        "ativo": usuario.ativo,
        "papeis": [p.papel for p in usuario.papeis],
        "perfil": usuario.perfil,
    }


def _get_usuario_or_404(db: Session, user_id: int) -> Usuario:
    db_user = db.query(Usuario).filter(Usuario.id == user_id).first()
    if db_user is None:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    return db_user


def _definir_papeis(db_user: Usuario, papeis):
    # Mantém as linhas existentes para não violar a unicidade (usuario_id, papel)
    novos = [p.value for p in dict.fromkeys(papeis)]
    atuais = {p.papel: p for p in db_user.papeis}
    db_user.papeis = [atuais.get(papel) or PapelUsuario(papel=papel) for papel in novos]


@router.post("", response_model=UsuarioRead, status_code=status.HTTP_201_CREATED)
def create_user(user: UsuarioCreate, db: Session = Depends(database.get_db)):
    if db.query(Usuario).filter(Usuario.email == user.email).first():
        raise HTTPException(status_code=400, detail="Email já registrado")

    db_user = Usuario(
        email=user.email,
        hashed_password=get_password_hash(user.password),
        perfil=Perfil(nome_completo=user.nome_completo, telefone=user.telefone),
    )
    _definir_papeis(db_user, user.papeis)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return usuario_para_leitura(db_user)


@router.get("", response_model=List[UsuarioRead])
def read_users(skip: int = 0, limit: int = 100, db: Session = Depends(database.get_db)):
    usuarios = db.query(Usuario).order_by(Usuario.email).offset(skip).limit(limit).all()
    return [usuario_para_leitura(u) for u in usuarios]


@router.get("/{user_id}", response_model=UsuarioRead)
def read_user(user_id: int, db: Session = Depends(database.get_db)):
    return usuario_para_leitura(_get_usuario_or_404(db, user_id))


@router.put("/{user_id}", response_model=UsuarioRead)
def update_user(user_id: int, user: UsuarioUpdate, db: Session = Depends(database.get_db)):
    db_user = _get_usuario_or_404(db, user_id)
    update_data = user.model_dump(exclude_unset=True)

    if update_data.get("email") and update_data["email"] != db_user.email:
        if db.query(Usuario).filter(Usuario.email == update_data["email"]).first():
            raise HTTPException(status_code=400, detail="Email já está em uso.")
        db_user.email = update_data["email"]

    if update_data.get("password"):
        db_user.hashed_password = get_password_hash(update_data["password"])
    if update_data.get("papeis") is not None:
        _definir_papeis(db_user, update_data["papeis"])
    if update_data.get("ativo") is not None:
        db_user.ativo = update_data["ativo"]

    if "nome_completo" in update_data or "telefone" in update_data:
        if db_user.perfil is None:
            db_user.perfil = Perfil(nome_completo="")
        if update_data.get("nome_completo"):
            db_user.perfil.nome_completo = update_data["nome_completo"]
        if "telefone" in update_data:
            db_user.perfil.telefone = update_data["telefone"]

    db.commit()
    db.refresh(db_user)
    return usuario_para_leitura(db_user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(database.get_db),
    contexto: ContextoSessao = Depends(confirmar_admin),
):
    db_user = _get_usuario_or_404(db, user_id)
    if db_user.id == contexto.usuario.id:
        raise HTTPException(status_code=400, detail="Você não pode excluir o próprio usuário.")
    db.delete(db_user)
    db.commit()
    return None

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

# Table and column names match the schema the front end already reads.


class Process(Base):
    __tablename__ = "proceso"

    id = Column("id_proceso", Integer, primary_key=True)
    name = Column("nombre", Text, nullable=False)
    description = Column("descripcion", Text)

    subprocesses = relationship(
        "Subprocess",
        back_populates="process",
        order_by="Subprocess.id",
    )


class Subprocess(Base):
    __tablename__ = "subproceso"

    id = Column("id_subproceso", Integer, primary_key=True)
    process_id = Column(
        "id_proceso",
        Integer,
        ForeignKey("proceso.id_proceso"),
        nullable=False,
    )
    name = Column("nombre", Text, nullable=False)
    description = Column("descripcion", Text)

    process = relationship("Process", back_populates="subprocesses")
    use_cases = relationship(
        "UseCase",
        back_populates="subprocess",
        order_by="UseCase.id",
    )


class UseCase(Base):
    __tablename__ = "caso_uso"

    id = Column("id_caso_uso", Integer, primary_key=True)
    subprocess_id = Column(
        "id_subproceso",
        Integer,
        ForeignKey("subproceso.id_subproceso"),
        nullable=False,
    )
    name = Column("nombre", Text, nullable=False)
    description = Column("descripcion", Text)
    actor = Column("actor_principal", Text)
    # 1 = functional, 2 = non-functional, 3 = system; other codes render as unknown
    kind = Column("tipo_caso_uso", Integer, nullable=False)
    preconditions = Column("precondiciones", Text)
    postconditions = Column("postcondiciones", Text)
    acceptance_criteria = Column("criterios_de_aceptacion", Text)

    subprocess = relationship("Subprocess", back_populates="use_cases")


class AnalysisLog(Base):
    __tablename__ = "analysis_log"

    id = Column(Integer, primary_key=True)
    specification = Column(Text, nullable=False)
    model = Column(String(255))
    raw_output = Column(Text)
    status = Column(String(32), nullable=False)
    error = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

from fastapi import APIRouter

from mortgage_engine.tax.brackets import TAX_YEAR

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "tax_year": TAX_YEAR,
    }

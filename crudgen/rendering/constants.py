"""Built-in template bodies for generated repository and controller classes."""

from __future__ import annotations

MODEL_CLASS_NAME = "ModelClassName"
MODEL_VAR_NAME = "modelVarName"

REPOSITORY_TEMPLATE = """using System.Collections.Generic;
using System.Threading.Tasks;
using Microsoft.EntityFrameworkCore;
using AB.Models;
using AB.Models.DbModels;
using AB.Models.TableModels;

namespace AB.Repositories
{
    public class {ModelClassName}Repo : BaseRepo<{ModelClassName}>
    {
        private readonly ABDbContext _dbContext;

        public {ModelClassName}Repo(ABDbContext dbContext) : base(dbContext)
        {
            _dbContext = dbContext;
        }
    }
}"""

CONTROLLER_TEMPLATE = """using Microsoft.AspNetCore.Mvc;
using AB.Repositories;
using AB.Models.DbModels;
using AB.Models.TableModels;

namespace AB.Controllers
{
    [ApiController]
    [Route("[controller]")]
    public class {ModelClassName}Controller : GenericController<{ModelClassName}>
    {
        private readonly {ModelClassName}Repo _{modelVarName}Repository;

        public {ModelClassName}Controller({ModelClassName}Repo repository) : base(repository)
        {
            _{modelVarName}Repository = ({ModelClassName}Repo)repository;
        }
    }
}"""


__all__ = [
    "CONTROLLER_TEMPLATE",
    "MODEL_CLASS_NAME",
    "MODEL_VAR_NAME",
    "REPOSITORY_TEMPLATE",
]
